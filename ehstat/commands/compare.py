"""Compare subcommand - code symbol sizes in two executables."""

import argparse
import logging
import os
import sys
from typing import Dict, List

from ..analysis.metrics import compare_symbol_sizes
from ..core.config import tool_command
from ..core.exceptions import ToolError
from ..core.models import ComparisonRow
from ..parsing.nm import parse_text_symbols
from ..tools.runner import run_tool
from ..utils.csv_stream import CsvStream

logger = logging.getLogger(__name__)

NAME_WIDTH = 60
ROW_FORMAT = "%-60s %12s %12s %8s"
RULE_WIDTH = 88


def parse_threshold(text: str) -> int:
    """Parse a decimal or 0x/0o/0b prefixed threshold for argparse."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid threshold: {text!r}") from None


def configure_compare_parser(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add compare arguments to a parser."""
    parser.add_argument('executable1', help='Baseline executable or shared library')
    parser.add_argument('executable2', help='Executable or shared library to compare')
    parser.add_argument(
        'threshold',
        type=parse_threshold,
        help='Only symbols larger than this many bytes are compared (e.g. 0x100)'
    )
    parser.add_argument(
        '--format',
        choices=('table', 'csv'),
        default='table',
        help='Output format (default: %(default)s)'
    )
    return parser


def add_compare_parser(subparsers) -> argparse.ArgumentParser:
    """
    Add 'compare' subcommand parser.

    Args:
        subparsers: Subparsers object from argparse

    Returns:
        The compare parser
    """
    parser = subparsers.add_parser(
        'compare',
        help='Compare function sizes between two executables',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=(
            'Compare code symbols found in both files with `nm -gU --size-sort`.\n\n'
            'Functions above the threshold are listed by size ratio, largest\n'
            'growth first.'
        ),
        epilog="""
examples:
  ehstat compare build-old/app build-new/app 0x100
  ehstat compare libfoo.so.1 libfoo.so.2 512 --format csv
        """
    )
    return configure_compare_parser(parser)


def get_symbols(executable: str, threshold: int) -> Dict[str, int]:
    """
    Read code symbols larger than threshold from an executable.

    Raises:
        ToolError: If nm fails
    """
    output = run_tool([tool_command('nm'), '-gU', '--size-sort', executable])
    symbols = parse_text_symbols(output, threshold)
    logger.debug("%s: %d code symbols above 0x%x", executable, len(symbols), threshold)
    return symbols


def truncate_name(name: str, width: int = NAME_WIDTH) -> str:
    """Shorten names longer than width, marking the cut with '...'."""
    if len(name) > width:
        return name[:width - 3] + '...'
    return name


def format_comparison(rows: List[ComparisonRow], label_a: str, label_b: str,
                      threshold: int) -> str:
    """Render comparison rows as the fixed-width comparison table."""
    lines = [
        '',
        f"Comparing {len(rows)} common functions above threshold 0x{threshold:x}",
        ROW_FORMAT % ('Symbol', label_a, label_b, 'Ratio'),
        '-' * RULE_WIDTH,
    ]
    for row in rows:
        lines.append(ROW_FORMAT % (
            truncate_name(row.name),
            f"0x{row.size_a:x}",
            f"0x{row.size_b:x}",
            f"{row.ratio:.3f}",
        ))
    return '\n'.join(lines)


def run_compare(args: argparse.Namespace) -> int:
    """
    Execute the compare subcommand.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        symbols1 = get_symbols(args.executable1, args.threshold)
        symbols2 = get_symbols(args.executable2, args.threshold)
    except ToolError as e:
        logger.error("%s", e)
        return 1

    rows = compare_symbol_sizes(symbols1, symbols2)
    label_a = os.path.basename(args.executable1)
    label_b = os.path.basename(args.executable2)

    if getattr(args, 'format', 'table') == 'csv':
        stream = CsvStream(sys.stdout, ['Symbol', label_a, label_b, 'Ratio'])
        for row in rows:
            stream.write_row([row.name, row.size_a, row.size_b, f"{row.ratio:.3f}"])
    else:
        print(format_comparison(rows, label_a, label_b, args.threshold))
    return 0

"""eh-size subcommand - unwinding metadata section sizes of a file."""

import argparse
import json
import logging
import os
from typing import List

from ..analysis.metrics import eh_frame_sizes, format_optional
from ..core.config import tool_command
from ..core.exceptions import ToolError
from ..core.models import EhFrameSizes
from ..parsing.readelf import parse_section_sizes
from ..tools.runner import run_tool

logger = logging.getLogger(__name__)


def configure_eh_size_parser(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add eh-size arguments to a parser."""
    parser.add_argument('files', nargs='+', metavar='file', help='ELF file(s) to inspect')
    parser.add_argument(
        '--json',
        action='store_true',
        help='Output sizes as JSON instead of one line per file'
    )
    return parser


def add_eh_size_parser(subparsers) -> argparse.ArgumentParser:
    """Add 'eh-size' subcommand parser."""
    parser = subparsers.add_parser(
        'eh-size',
        help='Show .sframe, .eh_frame and .eh_frame_hdr sizes',
        description='Report unwinding section sizes and the .sframe to .eh_frame ratios.',
    )
    return configure_eh_size_parser(parser)


def measure_eh_sections(path: str) -> EhFrameSizes:
    """
    Read unwinding section sizes of a file with `readelf -W -S`.

    Raises:
        ToolError: If readelf fails
    """
    output = run_tool([tool_command('readelf'), '-W', '-S', path])
    return eh_frame_sizes(parse_section_sizes(output))


def format_eh_line(path: str, sizes: EhFrameSizes) -> str:
    """Render the one-line eh-size report for a file."""
    return (
        f"{os.path.basename(path)}: "
        f"sframe={sizes.sframe} "
        f"eh_frame={sizes.eh_frame} "
        f"eh_frame_hdr={sizes.eh_frame_hdr} "
        f"eh={sizes.eh} "
        f"sframe/eh_frame={format_optional(sizes.sframe_to_eh_frame)} "
        f"sframe/eh={format_optional(sizes.sframe_to_eh)}"
    )


def run_eh_size(args: argparse.Namespace) -> int:
    """
    Execute the eh-size subcommand.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    records: List[dict] = []
    for path in args.files:
        try:
            sizes = measure_eh_sections(path)
        except ToolError as e:
            logger.error("Error running readelf on %s: %s", path, e.output.strip() or e)
            return 1

        if getattr(args, 'json', False):
            records.append({'file': path, **sizes.to_dict()})
        else:
            print(format_eh_line(path, sizes))

    if getattr(args, 'json', False):
        print(json.dumps(records, indent=2))
    return 0

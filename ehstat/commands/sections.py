"""Sections subcommand - .text, unwinding and VM size table for ELF files."""

import argparse
import logging
import os
from typing import Dict, List, Tuple

from ..analysis.metrics import format_optional, format_signed_percent, percent_change, percent_of
from ..core.config import tool_command
from ..core.exceptions import ToolError
from ..core.models import SectionLayout
from ..parsing.readelf import parse_section_layout
from ..tools.runner import run_tool
from ..utils.table import format_table

logger = logging.getLogger(__name__)

# Decimal places of the percentages in the table
PERCENT_PLACES = 1


def configure_sections_parser(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add sections arguments to a parser."""
    parser.add_argument('files', nargs='+', metavar='file', help='ELF file(s) to analyze')
    return parser


def add_sections_parser(subparsers) -> argparse.ArgumentParser:
    """Add 'sections' subcommand parser."""
    parser = subparsers.add_parser(
        'sections',
        help='Tabulate .text, EH and VM sizes of ELF files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=(
            'Analyze section sizes with `readelf -W -S -l`.\n\n'
            'Files sharing a basename are grouped; the first file of each group\n'
            'is the baseline for the VM increase column.'
        ),
        epilog="""
examples:
  ehstat sections gcc-13/cc1plus gcc-14/cc1plus
  ehstat sections build-{eh,sframe}/libstdc++.so.6
        """
    )
    return configure_sections_parser(parser)


def analyze_sections(path: str) -> SectionLayout:
    """
    Read the section layout of a file.

    Raises:
        ToolError: If readelf fails
    """
    output = run_tool([tool_command('readelf'), '-W', '-S', '-l', path])
    return parse_section_layout(output)


def group_by_basename(results: List[Tuple[str, SectionLayout]]) -> Dict[str, List[Tuple[str, SectionLayout]]]:
    """Group (path, layout) pairs by file basename, keeping input order."""
    groups: Dict[str, List[Tuple[str, SectionLayout]]] = {}
    for path, layout in results:
        groups.setdefault(os.path.basename(path), []).append((path, layout))
    return groups


def size_with_percent(size: int, vm: int) -> str:
    """Render a size with its share of the VM size, e.g. '256 (25.0%)'."""
    return f"{size} ({format_optional(percent_of(size, vm, PERCENT_PLACES), '%')})"


def vm_increase(vm: int, base_vm: int) -> str:
    """Render the VM size change relative to the group baseline."""
    if vm == base_vm:
        return '-'
    return format_signed_percent(percent_change(base_vm, vm, PERCENT_PLACES))


def build_table(results: List[Tuple[str, SectionLayout]]) -> Tuple[List[str], List[List[str]]]:
    """
    Build header and rows for the section size table.

    The .sframe column is only present when some file has an .sframe section.

    Returns:
        Tuple of (header, rows)
    """
    has_sframe = any(layout.sframe > 0 for _, layout in results)

    header = ['Filename', '.text size', 'EH size']
    if has_sframe:
        header.append('.sframe size')
    header.extend(['VM size', 'VM increase'])

    rows = []
    for files in group_by_basename(results).values():
        base_vm = files[0][1].vm
        for path, layout in files:
            row = [path, size_with_percent(layout.text, layout.vm), size_with_percent(layout.eh, layout.vm)]
            if has_sframe:
                row.append(size_with_percent(layout.sframe, layout.vm))
            row.append(str(layout.vm))
            row.append(vm_increase(layout.vm, base_vm))
            rows.append(row)
    return header, rows


def run_sections(args: argparse.Namespace) -> int:
    """
    Execute the sections subcommand.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    results = []
    for path in args.files:
        try:
            results.append((path, analyze_sections(path)))
        except ToolError as e:
            logger.error("Error running readelf on %s: %s", path, e.output.strip() or e)
            return 1

    header, rows = build_table(results)
    print(format_table(header, rows))
    return 0

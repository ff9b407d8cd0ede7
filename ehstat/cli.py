#!/usr/bin/env python3
"""
Command-line entry points for ehstat.

`ehstat <command>` dispatches to the subcommands; each subcommand is also
installed as a stand-alone script (ehstat-compare, ehstat-eh-size,
ehstat-scan, ehstat-sections).
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from . import __version__
from .commands.compare import add_compare_parser, configure_compare_parser, run_compare
from .commands.eh_size import add_eh_size_parser, configure_eh_size_parser, run_eh_size
from .commands.scan import add_scan_parser, configure_scan_parser, run_scan
from .commands.sections import add_sections_parser, configure_sections_parser, run_sections


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def configure_logging(verbose: bool = False) -> None:
    """Send diagnostics to stderr as bare messages."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(message)s',
        stream=sys.stderr,
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level parser with all subcommands."""
    parser = UsageArgumentParser(
        prog='ehstat',
        description='Report ELF section, symbol and unwinding metadata sizes',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    _add_common_arguments(parser)

    subparsers = parser.add_subparsers(dest='command', metavar='<command>')
    subparsers.required = True

    add_compare_parser(subparsers).set_defaults(func=run_compare)
    add_eh_size_parser(subparsers).set_defaults(func=run_eh_size)
    add_scan_parser(subparsers).set_defaults(func=run_scan)
    add_sections_parser(subparsers).set_defaults(func=run_sections)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    sys.exit(args.func(args))


def _tool_main(prog: str, description: str,
               configure: Callable[[argparse.ArgumentParser], argparse.ArgumentParser],
               run: Callable[[argparse.Namespace], int],
               argv: Optional[List[str]]) -> None:
    parser = UsageArgumentParser(prog=prog, description=description)
    _add_common_arguments(parser)
    configure(parser)
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    sys.exit(run(args))


def compare_main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ehstat-compare."""
    _tool_main('ehstat-compare', 'Compare function sizes between two executables',
               configure_compare_parser, run_compare, argv)


def eh_size_main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ehstat-eh-size."""
    _tool_main('ehstat-eh-size', 'Show .sframe, .eh_frame and .eh_frame_hdr sizes',
               configure_eh_size_parser, run_eh_size, argv)


def scan_main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ehstat-scan."""
    _tool_main('ehstat-scan', 'Measure .eh_frame share of VM size across system binaries',
               configure_scan_parser, run_scan, argv)


def sections_main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ehstat-sections."""
    _tool_main('ehstat-sections', 'Tabulate .text, EH and VM sizes of ELF files',
               configure_sections_parser, run_sections, argv)


if __name__ == "__main__":
    main()

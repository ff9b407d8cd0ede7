"""Scan subcommand - .eh_frame VM size distribution across system binaries."""

import argparse
import logging
import os
import sys
from typing import List, Optional, TextIO

from jinja2 import TemplateError as Jinja2TemplateError

from ..analysis.scanner import scan_directory
from ..analysis.stats import summarize
from ..core.config import ScanConfig, parse_buckets
from ..core.exceptions import ParseError, ToolError
from ..core.models import FileMetrics
from ..parsing.bloaty import parse_section_share
from ..tools.runner import run_tool
from ..utils.csv_stream import CsvStream
from ..utils.summary_formatter import breakpoints_label, render_summary

logger = logging.getLogger(__name__)

CSV_HEADER = ['File', 'Total_VM_KB', 'EH_Frame_VM_KB', 'EH_Frame_Ratio']


def _bucket_list(text: str):
    """argparse type for --buckets."""
    try:
        return parse_buckets(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid buckets {text!r}: {e}") from None


def _positive_int(text: str) -> int:
    """argparse type for --max-files."""
    try:
        value = int(text)
    except ValueError:
        value = 0
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text!r}")
    return value


def configure_scan_parser(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add scan arguments to a parser.

    Option defaults are left as None so unset options fall back to the
    EHSTAT_* environment variables.
    """
    defaults = ScanConfig()
    parser.add_argument(
        '--bloaty',
        metavar='PATH',
        help=f'bloaty executable (env EHSTAT_BLOATY, default: {defaults.bloaty_path})'
    )
    parser.add_argument(
        '--bin-dir',
        metavar='DIR',
        help=f'Directory of executables (env EHSTAT_EXECUTABLE_DIR, '
             f'default: {defaults.executable_dir})'
    )
    parser.add_argument(
        '--lib-dir',
        metavar='DIR',
        help=f'Directory of shared libraries (env EHSTAT_SHARED_LIB_DIR, '
             f'default: {defaults.shared_lib_dir})'
    )
    parser.add_argument(
        '--lib-pattern',
        metavar='GLOB',
        default=defaults.shared_lib_pattern,
        help='Glob selecting shared libraries (default: %(default)s)'
    )
    parser.add_argument(
        '--max-files',
        type=_positive_int,
        metavar='N',
        help=f'Files analyzed per directory (env EHSTAT_MAX_FILES, '
             f'default: {defaults.max_files})'
    )
    parser.add_argument(
        '--buckets',
        type=_bucket_list,
        default=defaults.buckets,
        help=f'Histogram breakpoints in percent (default: {breakpoints_label(defaults.buckets)})'
    )
    parser.add_argument(
        '--template',
        metavar='PATH',
        help='Path to custom Jinja2 template for the summary (default: built-in template)'
    )
    return parser


def add_scan_parser(subparsers) -> argparse.ArgumentParser:
    """Add 'scan' subcommand parser."""
    parser = subparsers.add_parser(
        'scan',
        help='Measure .eh_frame share of VM size across system binaries',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=(
            'Run bloaty over executables and shared libraries and report the\n'
            'share of VM size taken by .eh_frame.\n\n'
            'CSV rows go to stdout; progress and summary statistics go to stderr.'
        ),
        epilog="""
examples:
  ehstat scan > eh_frame.csv
  ehstat scan --bloaty ~/src/bloaty/build/bloaty --max-files 50
  EHSTAT_SHARED_LIB_DIR=/usr/lib64 ehstat scan --buckets 0,2,4,8,16
        """
    )
    return configure_scan_parser(parser)


def config_from_args(args: argparse.Namespace) -> ScanConfig:
    """Merge command-line options over the environment configuration."""
    config = ScanConfig.from_environment()
    if getattr(args, 'bloaty', None):
        config.bloaty_path = args.bloaty
    if getattr(args, 'bin_dir', None):
        config.executable_dir = args.bin_dir
    if getattr(args, 'lib_dir', None):
        config.shared_lib_dir = args.lib_dir
    if getattr(args, 'lib_pattern', None):
        config.shared_lib_pattern = args.lib_pattern
    if getattr(args, 'max_files', None):
        config.max_files = args.max_files
    if getattr(args, 'buckets', None):
        config.buckets = tuple(args.buckets)
    return config


def analyze_file(file_path: str, bloaty_path: str) -> Optional[FileMetrics]:
    """
    Measure the .eh_frame share of a file's VM size.

    Failures are soft: unreadable files, bloaty errors and missing rows
    all return None.
    """
    if not os.access(file_path, os.R_OK):
        logger.debug("Not readable: %s", file_path)
        return None

    try:
        output = run_tool([bloaty_path, file_path])
        if not output.strip():
            return None
        return parse_section_share(output, file_path)
    except (ToolError, ParseError) as e:
        logger.debug("%s: %s", file_path, e)
        return None


def process_files(files: List[str], description: str, bloaty_path: str,
                  csv_stream: CsvStream) -> List[FileMetrics]:
    """Analyze files in order, streaming a CSV row for each success."""
    logger.info("Scanning %s...", description)
    logger.info("Found %d %s", len(files), description)

    results = []
    for file_path in files:
        result = analyze_file(file_path, bloaty_path)
        if result:
            results.append(result)
            csv_stream.write_row(result.to_row())
        else:
            logger.info("  No .eh_frame found or error: %s", file_path)
    return results


def scan(config: ScanConfig, out: TextIO) -> List[FileMetrics]:
    """
    Scan the configured executable and shared library directories.

    Args:
        config: Scan configuration
        out: Stream receiving CSV output

    Returns:
        Metrics for every successfully analyzed file
    """
    logger.info("Scanning .eh_frame VM size distribution...")
    csv_stream = CsvStream(out, CSV_HEADER)

    results = []
    executables = scan_directory(config.executable_dir, max_files=config.max_files)
    results.extend(process_files(
        executables, f"executables in {config.executable_dir}", config.bloaty_path, csv_stream))

    shared_objects = scan_directory(
        config.shared_lib_dir, config.shared_lib_pattern, config.max_files)
    results.extend(process_files(
        shared_objects, f"shared objects in {config.shared_lib_dir}",
        config.bloaty_path, csv_stream))
    return results


def run_scan(args: argparse.Namespace) -> int:
    """
    Execute the scan subcommand.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config = config_from_args(args)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    results = scan(config, sys.stdout)
    stats = summarize([result.ratio_percent for result in results], config.buckets)

    try:
        summary = render_summary(stats, len(results), getattr(args, 'template', None))
    except (FileNotFoundError, Jinja2TemplateError) as e:
        logger.error("Template error: %s", e)
        return 1

    print(summary, file=sys.stderr)
    return 0

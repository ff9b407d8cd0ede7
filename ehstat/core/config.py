"""Configuration defaults for ehstat.

Values resolve in order: command-line option, environment variable,
built-in default.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_BLOATY_PATH = 'bloaty'
DEFAULT_EXECUTABLE_DIR = '/usr/bin'
DEFAULT_SHARED_LIB_DIR = '/usr/lib/x86_64-linux-gnu'
DEFAULT_SHARED_LIB_PATTERN = '*.so*'
DEFAULT_MAX_FILES = 200
DEFAULT_BUCKETS = (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 12)

ENV_PREFIX = 'EHSTAT_'


def tool_command(tool: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve the executable used for an inspection tool.

    EHSTAT_READELF, EHSTAT_NM and EHSTAT_BLOATY override the defaults.

    Args:
        tool: Tool name, e.g. 'readelf'
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Command name or path to execute
    """
    environ = os.environ if environ is None else environ
    return environ.get(f'{ENV_PREFIX}{tool.upper()}') or tool


def parse_buckets(text: str) -> Tuple[float, ...]:
    """
    Parse a comma-separated list of ascending histogram breakpoints.

    Raises:
        ValueError: If a value is not a number or the list is not ascending
    """
    values = tuple(float(part) for part in text.split(',') if part.strip())
    if len(values) < 2:
        raise ValueError("at least two breakpoints are required")
    if any(b <= a for a, b in zip(values, values[1:])):
        raise ValueError("breakpoints must be strictly ascending")
    return tuple(int(v) if v.is_integer() else v for v in values)


@dataclass
class ScanConfig:
    """Settings for the system-wide .eh_frame scan"""
    bloaty_path: str = DEFAULT_BLOATY_PATH
    executable_dir: str = DEFAULT_EXECUTABLE_DIR
    shared_lib_dir: str = DEFAULT_SHARED_LIB_DIR
    shared_lib_pattern: str = DEFAULT_SHARED_LIB_PATTERN
    max_files: int = DEFAULT_MAX_FILES
    buckets: Tuple[float, ...] = field(default=DEFAULT_BUCKETS)

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> 'ScanConfig':
        """
        Build a configuration from EHSTAT_* environment variables.

        Raises:
            ValueError: If EHSTAT_MAX_FILES is not a positive integer
        """
        environ = os.environ if environ is None else environ
        max_files = environ.get(f'{ENV_PREFIX}MAX_FILES')
        if max_files and int(max_files) <= 0:
            raise ValueError(f"{ENV_PREFIX}MAX_FILES must be a positive integer, got {max_files!r}")
        return cls(
            bloaty_path=tool_command('bloaty', environ),
            executable_dir=environ.get(f'{ENV_PREFIX}EXECUTABLE_DIR', DEFAULT_EXECUTABLE_DIR),
            shared_lib_dir=environ.get(f'{ENV_PREFIX}SHARED_LIB_DIR', DEFAULT_SHARED_LIB_DIR),
            max_files=int(max_files) if max_files else DEFAULT_MAX_FILES,
        )

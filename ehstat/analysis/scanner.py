"""Collect candidate binaries from a directory."""

import glob
import logging
import os
from typing import List, Optional

from ..core.config import DEFAULT_MAX_FILES

logger = logging.getLogger(__name__)


def scan_directory(directory: str, pattern: Optional[str] = None,
                   max_files: int = DEFAULT_MAX_FILES) -> List[str]:
    """
    List regular files in a directory.

    Args:
        directory: Directory to scan (not recursive)
        pattern: Optional glob pattern; without one, only executable files
            that are not hidden are returned
        max_files: Maximum number of paths returned

    Returns:
        Sorted file paths, or an empty list if the directory is missing or
        unreadable
    """
    if not os.path.isdir(directory):
        logger.warning("Directory not found: %s", directory)
        return []

    try:
        if pattern:
            candidates = glob.glob(os.path.join(directory, pattern))
            files = [path for path in candidates if os.path.isfile(path)]
        else:
            candidates = [
                os.path.join(directory, entry)
                for entry in os.listdir(directory)
                if not entry.startswith('.')
            ]
            files = [
                path for path in candidates
                if os.path.isfile(path) and os.access(path, os.X_OK)
            ]
    except OSError as e:
        logger.error("Error scanning %s: %s", directory, e)
        return []

    return sorted(files)[:max_files]

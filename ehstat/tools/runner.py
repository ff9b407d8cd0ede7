"""Run external binary inspection tools and capture their output."""

import logging
import subprocess
from typing import Sequence

from ..core.exceptions import ToolError

logger = logging.getLogger(__name__)


def run_tool(command: Sequence[str]) -> str:
    """
    Run a tool and return its standard output.

    There is no timeout; a hanging tool hangs the caller.

    Args:
        command: Tool executable followed by its arguments

    Returns:
        Captured standard output as text

    Raises:
        ToolError: If the tool cannot be started or exits with non-zero status
    """
    logger.debug("Running: %s", ' '.join(command))
    try:
        result = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            errors='replace',
            check=False
        )
    except OSError as e:
        raise ToolError(command, output=str(e)) from e

    if result.returncode != 0:
        raise ToolError(command, result.returncode, result.stderr or result.stdout)
    return result.stdout

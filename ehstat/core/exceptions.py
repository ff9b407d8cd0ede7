"""Exception hierarchy for ehstat."""

from typing import Optional, Sequence


class EhstatError(Exception):
    """Base exception for ehstat errors"""


class ToolError(EhstatError):
    """Raised when an external inspection tool cannot be run or fails"""

    def __init__(self, command: Sequence[str], returncode: Optional[int] = None,
                 output: str = ''):
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        if returncode is None:
            message = f"Failed to run {self.command[0]}: {output}"
        else:
            message = f"{self.command[0]} exited with status {returncode}"
            if output:
                message = f"{message}: {output.strip()}"
        super().__init__(message)


class ParseError(EhstatError):
    """Raised when a value required by a report cannot be read from tool output"""

"""External tool invocation."""

from .runner import run_tool

__all__ = ['run_tool']

"""Shared pytest fixtures for ehstat tests."""

import os
from typing import Collection, Dict

import pytest

from ehstat.core.exceptions import ToolError


def make_fake_run_tool(outputs: Dict[str, str], failures: Collection[str] = ()):
    """
    Build a stand-in for run_tool keyed on the inspected path.

    Args:
        outputs: Tool output to return for each path (the last argument)
        failures: Paths for which the tool exits with status 1

    Returns:
        Callable with the run_tool signature that records its calls
    """
    calls = []

    def fake_run_tool(command):
        calls.append(list(command))
        path = command[-1]
        if path in failures:
            raise ToolError(command, 1, f"{command[0]}: {path}: file format not recognized\n")
        return outputs[path]

    fake_run_tool.calls = calls
    return fake_run_tool


def _touch(path, mode=0o644):
    path.write_bytes(b'\x7fELF')
    os.chmod(path, mode)
    return path


@pytest.fixture
def binary_dirs(tmp_path):
    """
    Create an executable directory and a shared library directory.

    bin/ holds two executables, one non-executable file, a hidden
    executable and a subdirectory; lib/ holds two versioned shared objects
    and an unrelated file.
    """
    bin_dir = tmp_path / 'bin'
    lib_dir = tmp_path / 'lib'
    bin_dir.mkdir()
    lib_dir.mkdir()

    _touch(bin_dir / 'ls', 0o755)
    _touch(bin_dir / 'cat', 0o755)
    _touch(bin_dir / 'README', 0o644)
    _touch(bin_dir / '.hidden', 0o755)
    (bin_dir / 'subdir').mkdir()

    _touch(lib_dir / 'libc.so.6')
    _touch(lib_dir / 'libm.so.6')
    _touch(lib_dir / 'notes.txt')

    return bin_dir, lib_dir

"""
I/O Redirection

Opens redirection targets and installs them on the standard descriptors.
Called in the child between fork and exec; a failure here is fatal to
that child only.
"""

import os

from mysh.exceptions import RedirectionError
from .parser import Command


STDIN_FILENO = 0
STDOUT_FILENO = 1

OUTPUT_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
OUTPUT_MODE = 0o644


def open_input(path: str) -> int:
    """Open ``path`` read-only and return the descriptor."""
    try:
        return os.open(path, os.O_RDONLY)
    except OSError as e:
        raise RedirectionError(path, "input", e.strerror or str(e)) from e


def open_output(path: str) -> int:
    """Create or truncate ``path`` for writing and return the descriptor."""
    try:
        return os.open(path, OUTPUT_FLAGS, OUTPUT_MODE)
    except OSError as e:
        raise RedirectionError(path, "output", e.strerror or str(e)) from e


def _install(fd: int, target: int) -> None:
    if fd != target:
        os.dup2(fd, target)
        os.close(fd)


def apply_redirections(command: Command, stdin: bool = True, stdout: bool = True) -> None:
    """
    Apply the command's ``<`` and ``>`` targets to this process.

    Args:
        command: The stage being executed
        stdin: Whether the input redirection may be applied
        stdout: Whether the output redirection may be applied

    Raises:
        RedirectionError: If a target cannot be opened
    """
    if stdin and command.input_path is not None:
        _install(open_input(command.input_path), STDIN_FILENO)

    if stdout and command.output_path is not None:
        _install(open_output(command.output_path), STDOUT_FILENO)

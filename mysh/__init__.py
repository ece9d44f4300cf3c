"""
MySh - A small POSIX command interpreter

Parses a line of input, expands wildcards, resolves executables from a
fixed search path and runs the result as a builtin, a child process or a
two-stage pipeline.
"""

__version__ = "1.0.0"

from .shell.shell import Shell, create_shell

__all__ = [
    'Shell',
    'create_shell',
]

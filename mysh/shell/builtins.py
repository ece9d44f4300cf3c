"""
Shell Built-in Commands

Implements built-in shell commands.
"""

import contextlib
import os
import sys
from typing import Optional, Callable, List, Mapping

from mysh.exceptions import ShellException, BuiltinUsageError
from mysh.logger import get_logger
from .parser import Command
from .redirection import open_output
from .resolver import ExecutableResolver


class BuiltinCommands:
    """
    Built-in shell commands.

    These commands are executed directly by the shell without
    creating a new process, because they act on the shell itself:
    its working directory and its lifetime.
    """

    def __init__(
        self,
        resolver: ExecutableResolver,
        environ: Optional[Mapping[str, str]] = None,
        farewell: str = "Exiting my shell."
    ):
        """
        Initialize built-in commands.

        Args:
            resolver: Resolver used by ``which``
            environ: Mapping ``cd`` reads HOME from (defaults to os.environ)
            farewell: Message printed by ``exit``
        """
        self._resolver = resolver
        self._environ = os.environ if environ is None else environ
        self._farewell = farewell
        self._logger = get_logger('builtins')
        self._commands: dict[str, Callable[[List[str]], int]] = {
            'cd': self.cmd_cd,
            'pwd': self.cmd_pwd,
            'which': self.cmd_which,
            'exit': self.cmd_exit,
        }

    def get_commands(self) -> dict[str, Callable[[List[str]], int]]:
        """Get all built-in commands."""
        return self._commands

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, args: List[str]) -> Optional[int]:
        """
        Execute a built-in command.

        Args:
            args: Full argument list, name first

        Returns:
            Exit code, or None if ``args[0]`` is not a builtin
        """
        if not args:
            return None

        cmd = self._commands.get(args[0])
        if cmd is None:
            return None

        try:
            return cmd(args[1:])
        except ShellException as e:
            print(e.message, file=sys.stderr)
            return e.status

    def run(self, command: Command) -> Optional[int]:
        """
        Execute a parsed builtin, honouring ``>`` in-process.

        ``sys.stdout`` is swapped for the target file while the builtin runs.
        """
        if not self.is_builtin(command.name):
            return None

        if command.output_path is None:
            return self.execute(command.args)

        fd = open_output(command.output_path)
        with os.fdopen(fd, 'w') as target, contextlib.redirect_stdout(target):
            return self.execute(command.args)

    # Command implementations

    def cmd_cd(self, args: List[str]) -> int:
        """Change directory; no argument means HOME."""
        if len(args) > 1:
            raise BuiltinUsageError("cd", "too many arguments")

        if args:
            path = args[0]
        else:
            path = self._environ.get('HOME')
            if not path:
                raise BuiltinUsageError("cd", "HOME not set")

        try:
            os.chdir(path)
        except OSError as e:
            print(f"cd: {path}: {e.strerror}", file=sys.stderr)
            return 1

        self._logger.debug("Changed directory", context={'path': path})
        return 0

    def cmd_pwd(self, args: List[str]) -> int:
        """Print working directory."""
        try:
            cwd = os.getcwd()
        except OSError as e:
            print(f"pwd: {e.strerror}", file=sys.stderr)
            return 1

        print(cwd)
        return 0

    def cmd_which(self, args: List[str]) -> int:
        """Print the path a command name resolves to."""
        if len(args) != 1:
            raise BuiltinUsageError("which", "expected one argument")

        path = self._resolver.find_executable(args[0])
        if path is None:
            print(f"which: {args[0]} not found", file=sys.stderr)
            return 1

        print(path)
        return 0

    def cmd_exit(self, args: List[str]) -> int:
        """
        Print any arguments and the farewell, then end the process.

        Uses ``os._exit`` so no caller can intercept the termination.
        """
        if args:
            print(" ".join(args))
        print(self._farewell)
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(0)

"""
MySh Shell Module

One dispatch cycle per input line: parse, expand wildcards, then run the
result as a builtin or as child processes, and return its exit status.
A thin read loop drives the cycle from a terminal or a script file.
"""

import sys
from typing import Optional, Mapping, TextIO

from mysh.core.config_loader import Config, get_config
from mysh.exceptions import ShellException
from mysh.logger import get_logger
from .builtins import BuiltinCommands
from .parser import CommandParser, Pipeline
from .resolver import ExecutableResolver
from .runner import ProcessRunner
from .status import StatusReporter
from .wildcard import WildcardExpander


class Shell:
    """
    MySh command interpreter.

    Provides:
    - Command parsing
    - Wildcard expansion
    - Built-in commands
    - External commands and two-stage pipelines
    - I/O redirection

    Example:
        >>> shell = Shell(interactive=False)
        >>> shell.execute_line("echo hi > /tmp/t.txt")
        0
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        interactive: bool = False,
        environ: Optional[Mapping[str, str]] = None,
        resolver: Optional[ExecutableResolver] = None
    ):
        self._config = config or get_config()
        self._interactive = interactive
        self._logger = get_logger('shell')

        shell_config = self._config.shell
        self._parser = CommandParser(max_args=shell_config.max_args)
        self._expander = WildcardExpander()
        self._resolver = resolver or ExecutableResolver(shell_config.search_paths)
        self._builtins = BuiltinCommands(
            self._resolver,
            environ=environ,
            farewell=shell_config.farewell
        )
        self._reporter = StatusReporter(interactive)
        self._runner = ProcessRunner(self._resolver, self._reporter)
        self._last_status = 0

    @property
    def interactive(self) -> bool:
        return self._interactive

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def resolver(self) -> ExecutableResolver:
        return self._resolver

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    @property
    def last_status(self) -> int:
        return self._last_status

    def execute_line(self, line: str) -> int:
        """
        Parse and execute one line.

        Errors are reported on stderr and turned into a non-zero status;
        only the ``exit`` builtin ends the process.

        Returns:
            Exit status of the line (last stage for a pipeline)
        """
        try:
            pipeline = self._parser.parse(line)
            if pipeline.is_empty:
                return self._last_status
            self._expander.expand_pipeline(pipeline)
            status = self._dispatch(pipeline)
        except ShellException as e:
            print(e.message, file=sys.stderr)
            self._logger.debug("Line failed", context={'error': repr(e)})
            status = e.status

        self._last_status = status
        return status

    def _dispatch(self, pipeline: Pipeline) -> int:
        command = pipeline.first

        if not pipeline.is_pipeline and command.is_builtin:
            status = self._builtins.run(command)
            if status is not None:
                return status

        if not any(stage.args for stage in pipeline):
            # Every argument was a wildcard that matched nothing.
            return 0

        results = self._runner.run_pipeline(pipeline)
        return results[-1].status

    def run(self, stream: Optional[TextIO] = None) -> int:
        """
        Read and execute lines until end of input.

        Prompt and banner are printed only when interactive.

        Returns:
            Status of the last line executed
        """
        stream = stream or sys.stdin
        shell_config = self._config.shell

        if self._interactive:
            print(shell_config.banner)

        while True:
            if self._interactive:
                print(shell_config.prompt, end='', flush=True)

            try:
                line = stream.readline()
            except KeyboardInterrupt:
                print("^C")
                continue

            if not line:
                break
            if not line.strip():
                continue

            self.execute_line(line)

        if self._interactive:
            print(shell_config.goodbye)

        return self._last_status

    def run_script(self, path: str) -> int:
        """Execute every line of a script file."""
        with open(path, 'r', encoding='utf-8') as script:
            return self.run(script)


def create_shell(
    config: Optional[Config] = None,
    interactive: bool = False
) -> Shell:
    """Factory function to create a shell."""
    return Shell(config=config, interactive=interactive)

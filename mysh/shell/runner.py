"""
Process Runner

Runs external commands in child processes, singly or as a two-stage
pipeline, and waits for them.

The parent always blocks in waitpid; there is no background execution.
Every descriptor a process does not use is closed right after the fork,
otherwise the pipe reader would never see end-of-file.
"""

import os
import sys
from typing import List, Optional, Sequence

from mysh.exceptions import (
    CommandNotFoundError,
    ExecError,
    ForkError,
    RedirectionError,
)
from mysh.logger import get_logger
from .parser import Command, Pipeline
from .redirection import apply_redirections, STDIN_FILENO, STDOUT_FILENO
from .resolver import ExecutableResolver
from .status import ExecutionResult, StatusReporter, COMMAND_NOT_FOUND


STDERR_FILENO = 2
CHILD_FAILURE = 1


class ProcessRunner:
    """
    Forks and execs resolved commands.

    Example:
        >>> runner = ProcessRunner(ExecutableResolver(), StatusReporter(False))
        >>> runner.run(Command(args=["true"])).status
        0
    """

    def __init__(self, resolver: ExecutableResolver, reporter: StatusReporter):
        self._resolver = resolver
        self._reporter = reporter
        self._logger = get_logger('runner')

    def run(self, command: Command) -> ExecutionResult:
        """
        Run one command and wait for it.

        Raises:
            CommandNotFoundError: If the name does not resolve; nothing is forked
            ForkError: If the child cannot be created
        """
        path = self._resolver.find_executable(command.name)
        if path is None:
            raise CommandNotFoundError(command.name)

        pid = self._spawn(command, path)
        result = self._wait(pid)
        self._reporter.report(result)
        return result

    def run_pipeline(self, pipeline: Pipeline) -> List[ExecutionResult]:
        """
        Run every stage of ``pipeline`` and wait for all of them.

        A two-stage pipeline connects stage one's stdout to stage two's
        stdin. The pipe takes precedence over an explicit ``>`` on stage
        one or ``<`` on stage two; those redirections are ignored.

        A stage whose name does not resolve, or that wildcard expansion
        left without arguments, is not started; its result is status 127
        and the other stage still runs.

        Returns:
            One result per stage, in stage order
        """
        if not pipeline.is_pipeline:
            return [self.run(pipeline.first)]

        first, second = pipeline.stages
        paths = [self._resolve_stage(stage) for stage in (first, second)]

        if first.output_path is not None:
            self._logger.warning(
                "Pipe overrides output redirection of first stage",
                context={'path': first.output_path}
            )
        if second.input_path is not None:
            self._logger.warning(
                "Pipe overrides input redirection of second stage",
                context={'path': second.input_path}
            )

        try:
            read_fd, write_fd = os.pipe()
        except OSError as e:
            raise ForkError(e.strerror or str(e), syscall="pipe") from e

        pipe_fds = (read_fd, write_fd)
        pids: List[Optional[int]] = []
        try:
            pids.append(
                self._spawn(first, paths[0], stdout_fd=write_fd, close_fds=pipe_fds,
                            redirect_stdout=False)
                if paths[0] else None
            )
            pids.append(
                self._spawn(second, paths[1], stdin_fd=read_fd, close_fds=pipe_fds,
                            redirect_stdin=False)
                if paths[1] else None
            )
        finally:
            os.close(read_fd)
            os.close(write_fd)
            # Reap whatever was started, even if a later fork failed.
            results = [
                self._wait(pid) if pid is not None
                else ExecutionResult.exited(COMMAND_NOT_FOUND)
                for pid in pids
            ]

        for result in results:
            if result.pid is not None:
                self._reporter.report(result)
        return results

    def _resolve_stage(self, command: Command) -> Optional[str]:
        if not command.args:
            # Emptied by wildcard expansion; already reported there.
            self._logger.debug("Empty stage not started")
            return None
        path = self._resolver.find_executable(command.name)
        if path is None:
            print(CommandNotFoundError(command.name).message, file=sys.stderr)
        return path

    def _spawn(
        self,
        command: Command,
        path: str,
        stdin_fd: Optional[int] = None,
        stdout_fd: Optional[int] = None,
        close_fds: Sequence[int] = (),
        redirect_stdin: bool = True,
        redirect_stdout: bool = True
    ) -> int:
        """Fork a child that execs ``path``; return its pid."""
        # Unflushed buffers would otherwise be written twice.
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            pid = os.fork()
        except OSError as e:
            raise ForkError(e.strerror or str(e)) from e

        if pid == 0:
            self._exec_child(
                command, path, stdin_fd, stdout_fd, close_fds,
                redirect_stdin, redirect_stdout
            )

        self._logger.debug("Forked child", pid=pid, context={'path': path})
        return pid

    @staticmethod
    def _exec_child(
        command: Command,
        path: str,
        stdin_fd: Optional[int],
        stdout_fd: Optional[int],
        close_fds: Sequence[int],
        redirect_stdin: bool,
        redirect_stdout: bool
    ) -> None:
        """
        Child side of the fork. Never returns.

        On success the image is replaced by ``path``. On any failure the
        child reports on stderr and exits with status 1.
        """
        try:
            if stdin_fd is not None:
                os.dup2(stdin_fd, STDIN_FILENO)
            if stdout_fd is not None:
                os.dup2(stdout_fd, STDOUT_FILENO)
            for fd in close_fds:
                os.close(fd)

            apply_redirections(command, stdin=redirect_stdin, stdout=redirect_stdout)

            # argv[0] stays the name the user typed.
            os.execv(path, command.args)
        except RedirectionError as e:
            _child_report(e.message)
        except OSError as e:
            _child_report(ExecError(path, e.strerror or str(e)).message)
        finally:
            os._exit(CHILD_FAILURE)

    def _wait(self, pid: int) -> ExecutionResult:
        _, status = os.waitpid(pid, 0)
        result = ExecutionResult.from_wait_status(pid, status)
        self._logger.debug(
            "Child finished",
            pid=pid,
            context={'exit_code': result.exit_code, 'signal': result.signal}
        )
        return result


def _child_report(message: str) -> None:
    os.write(STDERR_FILENO, f"{message}\n".encode())

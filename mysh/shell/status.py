"""
Exit Status Decoding and Reporting
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO


COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of running one command.

    Exactly one of ``exit_code`` and ``signal`` is set.
    """
    exit_code: Optional[int] = None
    signal: Optional[int] = None
    pid: Optional[int] = None

    @classmethod
    def exited(cls, code: int, pid: Optional[int] = None) -> 'ExecutionResult':
        return cls(exit_code=code, pid=pid)

    @classmethod
    def from_wait_status(cls, pid: int, status: int) -> 'ExecutionResult':
        """Decode a raw status as returned by ``os.waitpid``."""
        if os.WIFSIGNALED(status):
            return cls(signal=os.WTERMSIG(status), pid=pid)
        return cls(exit_code=os.WEXITSTATUS(status), pid=pid)

    @property
    def exited_normally(self) -> bool:
        return self.signal is None

    @property
    def signaled(self) -> bool:
        return self.signal is not None

    @property
    def status(self) -> int:
        """Numeric status; signal deaths map to 128 + signal number."""
        if self.signal is not None:
            return 128 + self.signal
        return self.exit_code or 0

    @property
    def success(self) -> bool:
        return self.status == 0


class StatusReporter:
    """
    Turns an ExecutionResult into a diagnostic.

    Reports only in interactive use; scripted callers read the returned
    status instead.
    """

    def __init__(self, interactive: bool, stream: Optional[TextIO] = None):
        self.interactive = interactive
        self._stream = stream

    def report(self, result: ExecutionResult) -> Optional[str]:
        """Print and return the diagnostic for ``result``, if any."""
        if not self.interactive:
            return None

        if result.signaled:
            message = f"Terminated by signal: {result.signal}"
        elif result.exit_code:
            message = f"Command failed: exit code {result.exit_code}"
        else:
            return None

        print(message, file=self._stream or sys.stderr)
        return message

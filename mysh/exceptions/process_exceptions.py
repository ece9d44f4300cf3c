"""
Process Exceptions

Exceptions related to creating child processes and preparing them to run:
fork failures in the parent, and redirection or exec failures in the child.

Child-side errors never reach the parent. The child reports them and
terminates itself; the parent only sees the resulting exit status.
"""

from typing import Optional, Any

from .shell_exceptions import ShellException


class ProcessException(ShellException):
    """
    Base exception for all process-related errors.

    Attributes:
        message: Human-readable error description
        pid: Process ID associated with the error (if applicable)
    """

    def __init__(
        self,
        message: str,
        pid: Optional[int] = None,
        status: int = 1,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if pid is not None:
            ctx["pid"] = pid
        super().__init__(message=message, status=status, context=ctx)
        self.pid = pid


class ForkError(ProcessException):
    """
    The parent could not create a child process (or a pipe for one).

    Common causes:
    - Process table full (EAGAIN)
    - Out of memory (ENOMEM)
    - Descriptor limit reached while creating a pipe (EMFILE)
    """

    def __init__(self, reason: str, syscall: str = "fork") -> None:
        super().__init__(
            message=f"{syscall}: {reason}",
            context={"syscall": syscall}
        )
        self.syscall = syscall
        self.reason = reason


class RedirectionError(ProcessException):
    """
    A redirection target could not be opened.

    Example:
        >>> raise RedirectionError("missing.txt", "input", "No such file or directory")
    """

    def __init__(
        self,
        path: str,
        direction: str,
        reason: str,
        pid: Optional[int] = None
    ) -> None:
        super().__init__(
            message=f"Error opening {direction} file: {path}: {reason}",
            pid=pid,
            context={"path": path, "direction": direction}
        )
        self.path = path
        self.direction = direction
        self.reason = reason


class ExecError(ProcessException):
    """The child could not replace its image with the resolved executable."""

    def __init__(
        self,
        path: str,
        reason: str,
        pid: Optional[int] = None
    ) -> None:
        super().__init__(
            message=f"execv: {path}: {reason}",
            pid=pid,
            context={"path": path}
        )
        self.path = path
        self.reason = reason

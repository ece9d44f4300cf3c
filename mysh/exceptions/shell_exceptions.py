"""
Shell Exceptions

Exceptions raised while turning a line of input into something runnable:
parsing, wildcard expansion, executable resolution and builtin usage.
None of these are fatal to the interpreter; each carries the exit status
the dispatch cycle reports for the line.
"""

from typing import Optional, Any


class ShellException(Exception):
    """
    Base exception for all shell errors.

    Attributes:
        message: Human-readable error description, printed to the user
        status: Exit status reported for the failed line
        context: Additional context about the error

    Example:
        >>> raise ShellException("something went wrong", status=1)
    """

    def __init__(
        self,
        message: str,
        status: int = 1,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Status {self.status}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"status={self.status})"
        )


class ParseError(ShellException):
    """
    Malformed command line.

    Raised when a redirection operator has no following token. The line
    is discarded and the read loop continues.

    Example:
        >>> raise ParseError("Error: Missing input file", operator="<")
    """

    def __init__(
        self,
        message: str,
        operator: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if operator:
            ctx["operator"] = operator
        super().__init__(message=message, status=2, context=ctx)
        self.operator = operator


class CommandNotFoundError(ShellException):
    """No executable matched the command name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"{name}: command not found",
            status=127,
            context={"name": name}
        )
        self.name = name


class BuiltinUsageError(ShellException):
    """
    Wrong number of arguments given to a builtin.

    Example:
        >>> raise BuiltinUsageError("cd", "too many arguments")
    """

    def __init__(self, builtin: str, reason: str) -> None:
        super().__init__(
            message=f"{builtin}: {reason}",
            status=1,
            context={"builtin": builtin}
        )
        self.builtin = builtin
        self.reason = reason


class WildcardError(ShellException):
    """The current directory could not be listed for wildcard expansion."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(
            message=f"opendir: {reason}",
            status=1,
            context={"pattern": pattern}
        )
        self.pattern = pattern

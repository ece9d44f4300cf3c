"""
MySh Exception Hierarchy

Architecture:
    ShellException (Base)
    ├── ParseError
    ├── CommandNotFoundError
    ├── BuiltinUsageError
    ├── WildcardError
    └── ProcessException
        ├── ForkError
        ├── RedirectionError
        └── ExecError

Every exception carries the exit status reported for the failed line.
"""

from .shell_exceptions import (
    ShellException,
    ParseError,
    CommandNotFoundError,
    BuiltinUsageError,
    WildcardError,
)

from .process_exceptions import (
    ProcessException,
    ForkError,
    RedirectionError,
    ExecError,
)


class ConfigError(ShellException):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message=message, status=1, context={"path": path})
        self.path = path


__all__ = [
    'ShellException',
    'ParseError',
    'CommandNotFoundError',
    'BuiltinUsageError',
    'WildcardError',
    'ProcessException',
    'ForkError',
    'RedirectionError',
    'ExecError',
    'ConfigError',
]

"""
MySh Shell Module

Provides the command interpreter's execution engine:
- Command parsing
- Wildcard expansion
- Executable resolution
- Built-in commands
- Process execution, pipelines and I/O redirection
- Exit status reporting
"""

from .parser import (
    CommandParser,
    Command,
    Pipeline,
    Token,
    TokenType,
    BUILTIN_NAMES,
    is_builtin_name,
)
from .wildcard import WildcardExpander, has_wildcard
from .resolver import ExecutableResolver
from .builtins import BuiltinCommands
from .redirection import apply_redirections
from .runner import ProcessRunner
from .status import ExecutionResult, StatusReporter
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'Command',
    'Pipeline',
    'Token',
    'TokenType',
    'BUILTIN_NAMES',
    'is_builtin_name',
    'WildcardExpander',
    'has_wildcard',
    'ExecutableResolver',
    'BuiltinCommands',
    'apply_redirections',
    'ProcessRunner',
    'ExecutionResult',
    'StatusReporter',
    'Shell',
    'create_shell',
]

"""
MySh Logger Module

Subsystem loggers for the shell engine:
- Structured records with subsystem, pid and context fields
- Console output on stderr (stdout belongs to the commands being run)
- Optional file output
- One logger instance per subsystem

User-facing diagnostics ("command not found", redirection failures) are
printed directly and are not log records. The loggers here carry the
engine's internal events (resolution, fork, wait) for debugging.
"""

import logging
import sys
import threading
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Optional, Any


class LogLevel(IntEnum):
    """Log level enumeration with numeric values for comparison."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def from_name(cls, name: str) -> 'LogLevel':
        """Map a level name such as 'debug' to a LogLevel."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name}") from None


class LogFormatter(logging.Formatter):
    """
    Log formatter for MySh.

    Produces lines of the form::

        [2024-01-01 12:00:00.000] DEBUG    [runner] (pid=4242) forked child {path=/bin/ls}
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True, stream=None):
        super().__init__()
        self.use_colors = use_colors and self._supports_color(stream or sys.stderr)

    @staticmethod
    def _supports_color(stream) -> bool:
        """Check if the stream is a terminal."""
        if not hasattr(stream, 'isatty'):
            return False
        return stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime(
            '%Y-%m-%d %H:%M:%S.%f'
        )[:-3]

        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level_display = f"{self.COLORS[level]}{level:8s}{self.RESET}"
        else:
            level_display = f"{level:8s}"

        components = [f"[{timestamp}]", level_display]

        if hasattr(record, 'subsystem'):
            components.append(f"[{record.subsystem}]")

        if getattr(record, 'pid', None) is not None:
            components.append(f"(pid={record.pid})")

        components.append(str(record.getMessage()))

        if getattr(record, 'context', None):
            context_str = " ".join(f"{k}={v}" for k, v in record.context.items())
            components.append(f"{{{context_str}}}")

        message = " ".join(components)

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


class Logger:
    """
    Per-subsystem logger.

    Wraps ``logging.getLogger('mysh.<subsystem>')`` and attaches the
    subsystem name, an optional pid and a context dict to every record.

    Example:
        >>> log = Logger('runner')
        >>> log.debug("forked child", pid=4242, context={'path': '/bin/ls'})
    """

    _instances: dict[str, 'Logger'] = {}
    _lock = threading.Lock()
    _initialized = False
    _handlers: list[logging.Handler] = []

    def __new__(cls, subsystem: str = 'shell') -> 'Logger':
        """Get or create a logger for a subsystem."""
        with cls._lock:
            if subsystem not in cls._instances:
                instance = super().__new__(cls)
                instance._subsystem = subsystem
                instance._logger = logging.getLogger(f'mysh.{subsystem}')
                cls._instances[subsystem] = instance
            return cls._instances[subsystem]

    @classmethod
    def initialize(
        cls,
        level: int = LogLevel.WARNING,
        log_file: Optional[str] = None,
        use_colors: bool = True,
        console_output: bool = True
    ) -> None:
        """
        Initialize the logging system.

        Safe to call more than once; only the first call installs handlers
        unless ``reset()`` is called in between.

        Args:
            level: Minimum log level to capture
            log_file: Optional file path for log output
            use_colors: Whether to use ANSI colors in console output
            console_output: Whether to log to stderr at all
        """
        with cls._lock:
            if cls._initialized:
                return

            root_logger = logging.getLogger('mysh')
            root_logger.setLevel(level)
            # Records stop at the 'mysh' logger; the host application's
            # root handlers are left alone.
            root_logger.propagate = False

            if console_output:
                console_handler = logging.StreamHandler(sys.stderr)
                console_handler.setLevel(level)
                console_handler.setFormatter(LogFormatter(use_colors=use_colors))
                root_logger.addHandler(console_handler)
                cls._handlers.append(console_handler)

            if log_file:
                file_path = Path(log_file)
                file_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file)
                file_handler.setLevel(level)
                file_handler.setFormatter(LogFormatter(use_colors=False))
                root_logger.addHandler(file_handler)
                cls._handlers.append(file_handler)

            cls._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Remove installed handlers so ``initialize`` can run again."""
        with cls._lock:
            root_logger = logging.getLogger('mysh')
            for handler in cls._handlers:
                root_logger.removeHandler(handler)
                handler.close()
            cls._handlers = []
            root_logger.setLevel(logging.NOTSET)
            root_logger.propagate = True
            cls._initialized = False

    @property
    def subsystem(self) -> str:
        return self._subsystem

    def _log(
        self,
        level: int,
        message: str,
        pid: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        extra = {
            'subsystem': self._subsystem,
            'pid': pid,
            'context': context or {},
        }
        self._logger.log(level, message, extra=extra)

    def debug(
        self,
        message: str,
        pid: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """Log a debug message."""
        self._log(LogLevel.DEBUG, message, pid, context)

    def info(
        self,
        message: str,
        pid: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """Log an info message."""
        self._log(LogLevel.INFO, message, pid, context)

    def warning(
        self,
        message: str,
        pid: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """Log a warning message."""
        self._log(LogLevel.WARNING, message, pid, context)

    def error(
        self,
        message: str,
        pid: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """Log an error message."""
        self._log(LogLevel.ERROR, message, pid, context)


def get_logger(subsystem: str) -> Logger:
    """
    Get a logger for the specified subsystem.

    Args:
        subsystem: Name of the subsystem (e.g., 'parser', 'runner')

    Returns:
        Logger instance for the subsystem
    """
    return Logger(subsystem)

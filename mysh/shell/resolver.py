"""
Executable Resolution

Maps a command name to an executable file using a fixed list of search
directories. ``PATH`` is not consulted.
"""

import os
from typing import Optional, Sequence, Tuple

from mysh.core.config_loader import DEFAULT_SEARCH_PATHS
from mysh.logger import get_logger


class ExecutableResolver:
    """
    Resolves command names to executable paths.

    A name containing ``/`` is taken as a path and accepted only if it is
    executable. Any other name is looked up in each search directory in
    order and the first executable hit wins.

    The result is advisory: the file can change or vanish before it is
    executed.

    Example:
        >>> resolver = ExecutableResolver()
        >>> resolver.find_executable("ls")
        '/usr/bin/ls'
    """

    def __init__(self, search_paths: Sequence[str] = DEFAULT_SEARCH_PATHS):
        self._search_paths: Tuple[str, ...] = tuple(search_paths)
        self._logger = get_logger('resolver')

    @property
    def search_paths(self) -> Tuple[str, ...]:
        return self._search_paths

    def find_executable(self, name: str) -> Optional[str]:
        """
        Resolve ``name``.

        Returns:
            The executable's path, or None if nothing matched
        """
        if not name:
            return None

        if '/' in name:
            return name if self.is_executable(name) else None

        for directory in self._search_paths:
            candidate = os.path.join(directory, name)
            if self.is_executable(candidate):
                self._logger.debug("Resolved", context={'name': name, 'path': candidate})
                return candidate

        self._logger.debug("Not found", context={'name': name})
        return None

    @staticmethod
    def is_executable(path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.X_OK)

"""
Wildcard Expansion

Replaces glob-pattern arguments with the matching names in the current
directory. Matching is shell-style (fnmatch), case-sensitive, and only
ever looks at the literal working directory.

Only an argument containing ``*`` is treated as a pattern, so words such
as ``[`` or ``-?`` pass through untouched. Inside a pattern, ``?`` and
``[...]`` keep their fnmatch meaning.
"""

import fnmatch
import os
import sys
from typing import List

from mysh.exceptions import WildcardError
from mysh.logger import get_logger
from .parser import Command, Pipeline


WILDCARD_CHAR = '*'


def has_wildcard(arg: str) -> bool:
    return WILDCARD_CHAR in arg


class WildcardExpander:
    """
    Expands wildcard arguments in place.

    Matches keep directory-listing order; they are not sorted. A pattern
    that matches nothing is dropped from the argument list with a
    diagnostic, and the command still runs.
    """

    def __init__(self, directory: str = '.'):
        self._directory = directory
        self._logger = get_logger('wildcard')

    def expand(self, command: Command) -> Command:
        """Expand every wildcard argument of ``command``."""
        if not any(has_wildcard(arg) for arg in command.args):
            return command

        expanded: List[str] = []
        for arg in command.args:
            if not has_wildcard(arg):
                expanded.append(arg)
                continue

            matches = self._match(arg)
            if matches:
                self._logger.debug(
                    "Expanded wildcard",
                    context={'pattern': arg, 'matches': len(matches)}
                )
                expanded.extend(matches)
            else:
                print(f"No matches for wildcard: {arg}", file=sys.stderr)

        command.args[:] = expanded
        return command

    def expand_pipeline(self, pipeline: Pipeline) -> Pipeline:
        """Expand each stage independently."""
        for stage in pipeline:
            self.expand(stage)
        return pipeline

    def _match(self, pattern: str) -> List[str]:
        try:
            entries = os.listdir(self._directory)
        except OSError as e:
            raise WildcardError(pattern, e.strerror or str(e)) from e
        return [name for name in entries if fnmatch.fnmatchcase(name, pattern)]

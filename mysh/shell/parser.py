"""
Command Parser Module

Parses one line of shell input into a Pipeline of Commands.

Tokens are separated by whitespace. The operators ``<``, ``>`` and ``|``
are recognised only as whole tokens; there is no quoting or escaping.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Iterator, Tuple

from mysh.exceptions import ParseError
from mysh.logger import get_logger


BUILTIN_NAMES = ("cd", "pwd", "which", "exit")

DEFAULT_MAX_ARGS = 63


def is_builtin_name(name: str) -> bool:
    """Exact, case-sensitive match against the builtin names."""
    return name in BUILTIN_NAMES


class TokenType(Enum):
    """Token types for command parsing."""
    WORD = "word"
    PIPE = "pipe"
    REDIRECT_OUT = "redirect_out"
    REDIRECT_IN = "redirect_in"


OPERATORS = {
    '|': TokenType.PIPE,
    '>': TokenType.REDIRECT_OUT,
    '<': TokenType.REDIRECT_IN,
}


@dataclass
class Token:
    """A parsed token."""
    type: TokenType
    value: str


@dataclass
class Command:
    """One stage of a command line."""
    args: List[str] = field(default_factory=list)
    input_path: Optional[str] = None
    output_path: Optional[str] = None
    is_builtin: bool = False

    @property
    def name(self) -> str:
        return self.args[0] if self.args else ""


@dataclass
class Pipeline:
    """
    A parsed command line.

    ``stages`` holds one Command, or two when the line is a pipeline.
    ``piped`` records that a ``|`` was seen, even if the stage after it
    turned out to be empty.
    """
    stages: List[Command] = field(default_factory=lambda: [Command()])
    piped: bool = False

    @property
    def first(self) -> Command:
        return self.stages[0]

    @property
    def is_empty(self) -> bool:
        return not self.first.args

    @property
    def is_pipeline(self) -> bool:
        return len(self.stages) > 1

    def __len__(self) -> int:
        return len(self.stages)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.stages)


class CommandParser:
    """
    Parses shell command lines.

    Handles:
    - Command and arguments
    - A single pipe (|) joining two stages
    - Redirections (<, >) on either stage

    Example:
        >>> parser = CommandParser()
        >>> pipeline = parser.parse("ls -l | grep txt > out.txt")
        >>> [stage.args for stage in pipeline]
        [['ls', '-l'], ['grep', 'txt']]
    """

    MAX_STAGES = 2

    def __init__(self, max_args: int = DEFAULT_MAX_ARGS):
        self._max_args = max_args
        self._logger = get_logger('parser')

    @property
    def max_args(self) -> int:
        return self._max_args

    def parse(self, line: str) -> Pipeline:
        """
        Parse a command line.

        Args:
            line: Command line string, with or without a trailing newline

        Returns:
            Pipeline; its first stage has no arguments for blank input

        Raises:
            ParseError: If ``<`` or ``>`` is not followed by a file name
        """
        tokens = self._tokenize(line.rstrip('\n'))
        return self._parse_tokens(tokens, depth=1)

    def _tokenize(self, line: str) -> List[Token]:
        """Split a line on whitespace and classify each piece."""
        return [
            Token(OPERATORS.get(word, TokenType.WORD), word)
            for word in line.split()
        ]

    def _parse_tokens(self, tokens: List[Token], depth: int) -> Pipeline:
        command, rest, piped = self._parse_stage(tokens)
        pipeline = Pipeline(stages=[command], piped=piped)

        if not piped:
            return pipeline

        if not rest:
            self._logger.debug("Pipe with nothing after it; running first stage alone")
            return pipeline

        if depth >= self.MAX_STAGES:
            remainder = " ".join(token.value for token in rest)
            print(
                f"mysh: only two-stage pipelines are supported; ignoring: {remainder}",
                file=sys.stderr
            )
            return pipeline

        try:
            successor = self._parse_tokens(rest, depth + 1)
        except ParseError as e:
            print(e.message, file=sys.stderr)
            self._logger.warning("Dropped pipeline successor", context={'reason': e.message})
            return pipeline

        if successor.is_empty:
            self._logger.debug("Pipeline successor has no arguments; dropped")
            return pipeline

        pipeline.stages.extend(successor.stages)
        return pipeline

    def _parse_stage(self, tokens: List[Token]) -> Tuple[Command, List[Token], bool]:
        """
        Collect one stage.

        Returns the command, the tokens after a ``|`` (if any), and whether
        a ``|`` was seen.
        """
        command = Command()
        i = 0

        while i < len(tokens):
            token = tokens[i]

            if token.type == TokenType.PIPE:
                self._classify(command)
                return command, tokens[i + 1:], True

            if token.type in (TokenType.REDIRECT_IN, TokenType.REDIRECT_OUT):
                if i + 1 >= len(tokens) or tokens[i + 1].type != TokenType.WORD:
                    direction = "input" if token.type == TokenType.REDIRECT_IN else "output"
                    raise ParseError(f"Error: Missing {direction} file", operator=token.value)
                if token.type == TokenType.REDIRECT_IN:
                    command.input_path = tokens[i + 1].value
                else:
                    command.output_path = tokens[i + 1].value
                i += 2
                continue

            # Bounded argument list: extra words are dropped, not an error.
            if len(command.args) < self._max_args:
                command.args.append(token.value)
            i += 1

        self._classify(command)
        return command, [], False

    @staticmethod
    def _classify(command: Command) -> None:
        command.is_builtin = bool(command.args) and is_builtin_name(command.args[0])

"""Command-line tokenising: plain argument splitting and pipe/redirect parsing."""

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

ARGV_CAP = 16

_SPACES = " \t"
_SPECIALS = "|>"


class RedirMode(enum.Enum):
    NONE = 0
    TRUNC = 1
    APPEND = 2


@dataclass
class ParseResult:
    """A command, an optional piped second command and an optional redirect."""

    left: List[str] = field(default_factory=list)
    right: List[str] = field(default_factory=list)
    has_pipe: bool = False
    redir_mode: RedirMode = RedirMode.NONE
    redir_path: Optional[str] = None


class ParseError(ValueError):
    """The line is not a valid command."""


class _Token(enum.Enum):
    WORD = 0
    PIPE = 1
    REDIR_TRUNC = 2
    REDIR_APPEND = 3


def split_args(line: Optional[str], max_args: Optional[int] = None) -> List[str]:
    """Split on spaces and tabs, keeping at most max_args words."""
    if not line or (max_args is not None and max_args <= 0):
        return []
    words = [word for word in line.replace("\t", " ").split(" ") if word]
    return words if max_args is None else words[:max_args]


def _tokens(line: str) -> Iterator[Tuple[_Token, Optional[str]]]:
    pos = 0
    end = len(line)
    pending: Optional[str] = None

    while True:
        while pos < end and line[pos] in _SPACES:
            pos += 1

        if pending is not None:
            special, pending = pending, None
            if special == "|":
                yield _Token.PIPE, None
            elif pos < end and line[pos] == ">":
                pos += 1
                yield _Token.REDIR_APPEND, None
            else:
                yield _Token.REDIR_TRUNC, None
            continue

        if pos >= end:
            return

        ch = line[pos]
        if ch == "|":
            pos += 1
            yield _Token.PIPE, None
            continue
        if ch == ">":
            pos += 1
            if pos < end and line[pos] == ">":
                pos += 1
                yield _Token.REDIR_APPEND, None
            else:
                yield _Token.REDIR_TRUNC, None
            continue

        start = pos
        while pos < end and line[pos] not in _SPACES and line[pos] not in _SPECIALS:
            pos += 1
        word = line[start:pos]
        if pos < end:
            if line[pos] in _SPECIALS:
                pending = line[pos]
            pos += 1
        yield _Token.WORD, word


def parse_with_redirection(line: Optional[str]) -> ParseResult:
    """Parse "cmd [| cmd] [> path | >> path]"; raise ParseError if malformed."""
    if line is None:
        raise ParseError("no input")

    result = ParseResult()
    current = result.left
    need_redir_path = False

    for token, word in _tokens(line):
        if token is _Token.WORD:
            if need_redir_path:
                result.redir_path = word
                need_redir_path = False
                continue
            if result.redir_mode is not RedirMode.NONE:
                raise ParseError("arguments after redirection target")
            if len(current) >= ARGV_CAP:
                raise ParseError("too many arguments")
            current.append(word)
            continue

        if need_redir_path:
            raise ParseError("missing redirection target")

        if token is _Token.PIPE:
            if result.has_pipe or result.redir_mode is not RedirMode.NONE or not current:
                raise ParseError("misplaced pipe")
            result.has_pipe = True
            current = result.right
            continue

        if result.redir_mode is not RedirMode.NONE:
            raise ParseError("more than one redirection")
        result.redir_mode = (
            RedirMode.APPEND if token is _Token.REDIR_APPEND else RedirMode.TRUNC
        )
        need_redir_path = True

    if need_redir_path:
        raise ParseError("missing redirection target")
    if not result.left:
        raise ParseError("empty command")
    if result.has_pipe and not result.right:
        raise ParseError("empty command after pipe")
    return result
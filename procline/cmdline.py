"""
Command line tokenizer.

Splits a literal command-line string into argv following POSIX ``sh``
quoting. Whitespace separates words and a backslash escapes the next
character. Single quotes keep everything verbatim. Inside double quotes
a backslash only escapes a double quote, a backslash, a dollar sign, a
backtick or a newline; anywhere else it is kept as is. Nothing is
expanded: no globbing, no variables, no redirection.
"""

import shlex
from typing import Iterable, List, Tuple

from .constants import (
    DOUBLE_QUOTE,
    DOUBLE_QUOTE_ESCAPABLE,
    ESCAPE,
    LINE_CONTINUATION,
    NUL,
    SINGLE_QUOTE,
    WHITESPACE,
)
from .errors import CommandLineError, NoCommandError

__all__ = ['split', 'parse', 'quote', 'join']


def split(command_line: str) -> List[str]:
    """
    Split a command line into words.

    Args:
        command_line: e.g. ``sh -c 'echo "1 2 3 4"'``

    Returns:
        The words in order, e.g. ``['sh', '-c', 'echo "1 2 3 4"']``

    Raises:
        CommandLineError: On an unterminated quote, a trailing backslash
            or a NUL character (no program can receive one)
    """
    nul = command_line.find(NUL)
    if nul >= 0:
        raise CommandLineError(command_line, "embedded null byte", nul)

    words: List[str] = []
    current: List[str] = []
    # An empty quoted span still makes a word, so track it separately
    in_word = False
    i = 0
    n = len(command_line)

    while i < n:
        c = command_line[i]

        if c in WHITESPACE:
            if in_word:
                words.append("".join(current))
                current = []
                in_word = False
            i += 1

        elif c == ESCAPE:
            if i + 1 >= n:
                raise CommandLineError(command_line, "dangling escape character", i)
            nxt = command_line[i + 1]
            if nxt != LINE_CONTINUATION:
                current.append(nxt)
                in_word = True
            i += 2

        elif c == SINGLE_QUOTE:
            end = command_line.find(SINGLE_QUOTE, i + 1)
            if end < 0:
                raise CommandLineError(command_line, "unterminated single quote", i)
            current.append(command_line[i + 1:end])
            in_word = True
            i = end + 1

        elif c == DOUBLE_QUOTE:
            i = _read_double_quoted(command_line, i, current)
            in_word = True

        else:
            current.append(c)
            in_word = True
            i += 1

    if in_word:
        words.append("".join(current))
    return words


def _read_double_quoted(command_line: str, start: int, current: List[str]) -> int:
    """Consume a double-quoted span opening at ``start``; return the index after it."""
    i = start + 1
    n = len(command_line)
    while i < n:
        c = command_line[i]
        if c == DOUBLE_QUOTE:
            return i + 1
        if c == ESCAPE and i + 1 < n and command_line[i + 1] in DOUBLE_QUOTE_ESCAPABLE:
            if command_line[i + 1] != LINE_CONTINUATION:
                current.append(command_line[i + 1])
            i += 2
            continue
        current.append(c)
        i += 1
    raise CommandLineError(command_line, "unterminated double quote", start)


def parse(command_line: str) -> Tuple[str, List[str]]:
    """
    Split a command line into the program and its arguments.

    Raises:
        CommandLineError: If the command line is malformed
        NoCommandError: If it contains no words at all
    """
    words = split(command_line)
    if not words:
        raise NoCommandError(command_line)
    return words[0], words[1:]


def quote(arg: str) -> str:
    """Quote one argument so that ``split`` gives it back unchanged."""
    return shlex.quote(arg)


def join(argv: Iterable[str]) -> str:
    """Build a command line from argv; the inverse of ``split``."""
    return " ".join(quote(arg) for arg in argv)

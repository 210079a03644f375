"""Here-documents: delimiter handling, reading the body and wiring it to stdin."""

from __future__ import annotations

import os
import signal
import sys
import tempfile
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from .commands import Command
from .tokens import Token, TokenType

LineReader = Callable[[str], "str | None"]
Expander = Callable[[str], "str | None"]

_PROMPT = "> "
_EOF_WARNING = "minishell: warning: here-document delimited by end-of-file"
_FORBIDDEN = frozenset(" \t\n<>|")
_STDIN = 0


@dataclass
class Heredoc:
    """A here-document: its delimiter, whether lines are expanded, and its body."""

    delimiter: str
    expand: bool = True
    content: str | None = None


def should_expand_heredoc(delimiter: str | None) -> bool:
    """Return True unless the delimiter holds an odd number of quote characters."""
    if delimiter is None:
        return True
    quotes = sum(1 for c in delimiter if c in "'\"")
    return quotes % 2 == 0


def is_valid_heredoc_delimiter(delimiter: str | None) -> bool:
    """Return whether ``delimiter`` is non-empty and free of blanks and operators."""
    if not delimiter:
        return False
    return not any(c in _FORBIDDEN for c in delimiter)


def extract_heredoc_delimiter(token: Token, following: Token | None) -> str | None:
    """Return the delimiter of a HEREDOC token.

    A merged token carries the delimiter itself; otherwise it is taken from
    ``following`` when that is a word. Returns None when there is none.
    """
    if token.kind is not TokenType.HEREDOC:
        return None
    if token.shrinked is TokenType.WORD and token.value:
        return token.value
    if following is None or following.kind is not TokenType.WORD:
        return None
    return following.value


def _input_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


@contextmanager
def _sigint_ignored() -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)


def read_heredoc(
    heredoc: Heredoc,
    read_line: LineReader | None = None,
    expander: Expander | None = None,
) -> str:
    """Read lines until the delimiter or end of input and store them as the body.

    Each kept line ends with a newline. When ``heredoc.expand`` is set and an
    ``expander`` is given, every line is passed through it first.
    """
    reader = read_line if read_line is not None else _input_line
    lines: list[str] = []
    with _sigint_ignored():
        while True:
            line = reader(_PROMPT)
            if line is None:
                print(_EOF_WARNING, file=sys.stderr)
                break
            if line == heredoc.delimiter:
                break
            if heredoc.expand and expander is not None:
                expanded = expander(line)
                if expanded is None:
                    raise ValueError("expansion of here-document line failed")
                line = expanded
            lines.append(line + "\n")
    heredoc.content = "".join(lines)
    return heredoc.content


def _fd_from_text(text: str) -> int:
    with tempfile.TemporaryFile() as handle:
        handle.write(text.encode())
        handle.flush()
        handle.seek(0)
        return os.dup(handle.fileno())


def handle_heredoc(
    cmd: Command,
    delimiter: str,
    read_line: LineReader | None = None,
    expander: Expander | None = None,
) -> Heredoc:
    """Read a here-document and make it the standard input of ``cmd``.

    The command's ``fd_in`` becomes a readable descriptor positioned at the
    start of the body; a previous non-standard input descriptor is closed.
    """
    if delimiter is None:
        raise ValueError("here-document needs a delimiter")
    heredoc = Heredoc(delimiter, should_expand_heredoc(delimiter))
    content = read_heredoc(heredoc, read_line, expander)
    fd = _fd_from_text(content)
    if cmd.fd_in != _STDIN:
        os.close(cmd.fd_in)
    cmd.fd_in = fd
    cmd.heredoc = True
    cmd.delimiter = heredoc.delimiter
    return heredoc


__all__ = [
    "Heredoc",
    "should_expand_heredoc",
    "is_valid_heredoc_delimiter",
    "extract_heredoc_delimiter",
    "read_heredoc",
    "handle_heredoc",
]
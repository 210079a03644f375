"""Simple commands of a pipeline and the argument vectors built for them."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .tokens import Token, TokenType, is_redir_token

_STDIN = 0
_STDOUT = 1


@dataclass
class Command:
    """One simple command; ``next`` links to the command after a pipe."""

    cmd: str | None = None
    argv: list[str] = field(default_factory=list)
    input_file: str | None = None
    output_file: str | None = None
    delimiter: str | None = None
    fd_in: int = _STDIN
    fd_out: int = _STDOUT
    is_pipe: bool = False
    append: bool = False
    heredoc: bool = False
    pid: int = 0
    redirs: list[Any] = field(default_factory=list)
    next: Command | None = None

    def add_word(self, word: str) -> None:
        """Append a word to the arguments; the first word names the command."""
        if self.cmd is None:
            self.cmd = word
        self.argv.append(word)

    def set_input_file(self, filename: str) -> None:
        """Use ``filename`` as the command's standard input."""
        self.input_file = filename

    def set_output_file(self, filename: str, append: bool) -> None:
        """Send the command's output to ``filename``, appending if asked."""
        self.output_file = filename
        self.append = append

    def pipe(self) -> Command:
        """Start the next command of the pipeline and return it."""
        new_cmd = Command()
        self.is_pipe = True
        self.next = new_cmd
        return new_cmd


def count_args(tokens: Iterable[Token]) -> int:
    """Count the words of one command, up to a pipe or EOF.

    A redirection operator hides the token that follows it.
    """
    count = 0
    it = iter(tokens)
    for token in it:
        if token.kind in (TokenType.EOF, TokenType.PIPE):
            break
        if token.kind is TokenType.WORD:
            count += 1
        elif is_redir_token(token.kind):
            next(it, None)
    return count


def create_argv(tokens: Iterable[Token], count: int) -> list[str]:
    """Collect at most ``count`` word values, skipping redirection targets."""
    argv: list[str] = []
    it = iter(tokens)
    for token in it:
        if len(argv) >= count:
            break
        if token.kind is TokenType.WORD:
            argv.append(token.value if token.value is not None else "")
        elif is_redir_token(token.kind):
            next(it, None)
    return argv


__all__ = ["Command", "count_args", "create_argv"]

_ = sys  # stdin/stdout descriptors are the conventional 0 and 1
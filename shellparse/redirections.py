"""Recording and opening redirections, and the last steps of parsing."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator

from .commands import Command
from .tokens import Token, TokenType

Expander = Callable[[str], "str | None"]

_STDIN = 0
_STDOUT = 1


def handle_redirection(cmd: Command, token: Token, target: Token) -> None:
    """Record the redirection ``token`` whose file or delimiter is ``target``."""
    if target.value is None:
        raise ValueError("redirection has no target")
    kind = token.kind
    filename = target.value
    if kind is TokenType.REDIR_IN:
        cmd.set_input_file(filename)
    elif kind in (TokenType.REDIR_OUT, TokenType.APPEND):
        cmd.set_output_file(filename, kind is TokenType.APPEND)
    elif kind is TokenType.HEREDOC:
        cmd.heredoc = True
        cmd.delimiter = filename
    else:
        raise ValueError(f"not a redirection token: {kind.name}")
    cmd.redirs.append((kind, filename))


def setup_redirections(cmd: Command) -> None:
    """Open the command's input and output files; raises OSError on failure."""
    if cmd.input_file is not None:
        cmd.fd_in = os.open(cmd.input_file, os.O_RDONLY)
    if cmd.output_file is not None:
        flags = os.O_WRONLY | os.O_CREAT
        flags |= os.O_APPEND if cmd.append else os.O_TRUNC
        cmd.fd_out = os.open(cmd.output_file, flags, 0o644)


def was_in_single_quotes(arg: str, tokens: Iterable[Token]) -> bool:
    """Return whether ``arg`` equals the text of a single-quoted token."""
    return any(
        token.kind is TokenType.QUOTES and token.value is not None and token.value == arg
        for token in tokens
    )


def expand_command_args(
    cmd: Command, tokens: Iterable[Token], expander: Expander
) -> None:
    """Expand every argument holding '$' that did not come from single quotes."""
    token_list = list(tokens)
    for i, arg in enumerate(cmd.argv):
        if "$" in arg and not was_in_single_quotes(arg, token_list):
            expanded = expander(arg)
            if expanded is not None:
                cmd.argv[i] = expanded


def _pipeline(first: Command | None) -> Iterator[Command]:
    current = first
    while current is not None:
        yield current
        current = current.next


def _close_descriptors(first: Command) -> None:
    for cmd in _pipeline(first):
        if cmd.fd_in != _STDIN:
            os.close(cmd.fd_in)
            cmd.fd_in = _STDIN
        if cmd.fd_out != _STDOUT:
            os.close(cmd.fd_out)
            cmd.fd_out = _STDOUT


def finalize_parsing(
    commands: Command | None, tokens: Iterable[Token], expander: Expander
) -> Command | None:
    """Expand arguments and open redirections for every command of the pipeline.

    Returns None when the first command has no arguments. If a file cannot be
    opened, every descriptor already opened is closed and the OSError is raised.
    """
    if commands is None or not commands.argv:
        return None
    token_list = list(tokens)
    for cmd in _pipeline(commands):
        expand_command_args(cmd, token_list, expander)
        try:
            setup_redirections(cmd)
        except OSError:
            _close_descriptors(commands)
            raise
    return commands


__all__ = [
    "handle_redirection",
    "setup_redirections",
    "was_in_single_quotes",
    "expand_command_args",
    "finalize_parsing",
]
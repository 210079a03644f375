"""Turn an input line into a token list and merge redirections with targets."""

from __future__ import annotations

from collections.abc import Iterable

from .lexer import Lexer
from .shrinker import shrink_redir_tokens
from .tokens import Token, TokenType


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens, ending with an EOF token.

    A '#' at the start of a token begins a comment that runs to the end of
    the line. Raises ShellSyntaxError when the line is malformed.
    """
    lexer = Lexer(text)
    tokens: list[Token] = []
    while lexer.curr_char:
        if lexer.skip_comment():
            continue
        token = lexer.tokenize_current()
        if token is not None:
            tokens.append(token)
    tokens.append(Token(TokenType.EOF))
    return tokens


def apply_shrink(tokens: Iterable[Token]) -> list[Token]:
    """Return ``tokens`` with every redirection merged into the word after it."""
    return shrink_redir_tokens(tokens)
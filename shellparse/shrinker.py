"""Merge redirection tokens with the word that follows them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from .tokens import Token, TokenType, is_redir_token


def merge_redir(redir: Token, target: Token) -> Token:
    """Return a redirection token carrying its target's value.

    The result keeps the redirection's type and position and records the
    target's type in ``shrinked``.
    """
    if target.value is None:
        raise ValueError("redirection target has no value")
    return Token(
        kind=redir.kind,
        value=target.value,
        position=redir.position,
        shrinked=target.kind,
    )


def shrink_redir_tokens(tokens: Iterable[Token]) -> list[Token]:
    """Return a new token list where each redirection absorbs a following word.

    Tokens that are not merged are copied unchanged; the input is not modified.
    """
    source = list(tokens)
    result: list[Token] = []
    i = 0
    while i < len(source):
        current = source[i]
        following = source[i + 1] if i + 1 < len(source) else None
        if (
            is_redir_token(current.kind)
            and following is not None
            and following.kind is TokenType.WORD
        ):
            result.append(merge_redir(current, following))
            i += 2
        else:
            result.append(replace(current))
            i += 1
    return result
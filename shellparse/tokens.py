"""Token types, the token record and character classes used by the lexer."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_WHITESPACE = frozenset(" \t\n\r")
_QUOTES = frozenset("'\"")
_OPERATORS = frozenset("|<>")
_END = frozenset(("", "\0"))
_DELIMITERS = _WHITESPACE | _QUOTES | _OPERATORS | frozenset("$") | _END


class TokenType(enum.Enum):
    """Kinds of token produced by the lexer."""

    WORD = enum.auto()
    PIPE = enum.auto()
    REDIR_IN = enum.auto()
    REDIR_OUT = enum.auto()
    APPEND = enum.auto()
    HEREDOC = enum.auto()
    QUOTES = enum.auto()
    DQUOTES = enum.auto()
    DOLLAR = enum.auto()
    EOF = enum.auto()
    ERROR = enum.auto()


_REDIRECTIONS = frozenset(
    {TokenType.REDIR_IN, TokenType.REDIR_OUT, TokenType.APPEND, TokenType.HEREDOC}
)


@dataclass
class Token:
    """A lexical token.

    ``shrinked`` records the type of the target a redirection token was
    merged with, or ``None`` when no merge took place.
    """

    kind: TokenType
    value: str | None = None
    position: int = 0
    shrinked: TokenType | None = None


class ShellSyntaxError(Exception):
    """Raised when the input line is not valid shell syntax."""

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


def is_whitespace(c: str) -> bool:
    """Return True for a space, tab, newline or carriage return."""
    return c in _WHITESPACE


def is_delimiter(c: str) -> bool:
    """Return True for a character that ends a plain word."""
    return c in _DELIMITERS


def is_operator(c: str) -> bool:
    """Return True for a pipe or redirection character."""
    return c in _OPERATORS


def is_quote(c: str) -> bool:
    """Return True for a single or double quote."""
    return c in _QUOTES


def is_expand_char(c: str) -> bool:
    """Return True for the variable expansion character."""
    return c == "$"


def get_quote_type(c: str) -> TokenType:
    """Map a quote character to its token type; anything else is ERROR."""
    if c == "'":
        return TokenType.QUOTES
    if c == '"':
        return TokenType.DQUOTES
    return TokenType.ERROR


def is_redir_token(token_type: TokenType) -> bool:
    """Return True for the four redirection token types."""
    return token_type in _REDIRECTIONS
"""Tokenizer, redirection shrinker, command and here-document helpers for a small shell."""

__version__ = "0.1.0"

__all__ = [
    "commands",
    "environment",
    "heredoc",
    "lexer",
    "redirections",
    "shrinker",
    "tokenizer",
    "tokens",
]
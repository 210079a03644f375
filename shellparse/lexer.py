"""Character-level lexer that turns one input line into tokens."""

from __future__ import annotations

from .tokens import (
    ShellSyntaxError,
    Token,
    TokenType,
    get_quote_type,
    is_delimiter,
    is_expand_char,
    is_operator,
    is_quote,
    is_whitespace,
)

_PIPE_AT_START = "syntax error near unexpected token `|'"
_REDIR_AT_END = "syntax error near unexpected token `newline'"
_CONSECUTIVE_REDIR = "syntax error: conflicting redirection operators"
_UNCLOSED_QUOTE = "syntax error: unclosed quote"
_INVALID_OPERATOR = "syntax error: invalid operator"
_TOKEN_FAILED = "syntax error: unexpected character"

_SINGLE_OPERATORS = {
    "|": TokenType.PIPE,
    ">": TokenType.REDIR_OUT,
    "<": TokenType.REDIR_IN,
}
_DOUBLE_OPERATORS = {
    ">": (TokenType.APPEND, ">>"),
    "<": (TokenType.HEREDOC, "<<"),
}


def _is_name_char(c: str) -> bool:
    return c != "" and c.isascii() and (c.isalnum() or c == "_")


class Lexer:
    """Cursor over an input line.

    ``curr_char`` is the character at ``pos``; it is the empty string once the
    end of the input has been passed.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.read_pos = 1 if text else 0
        self.curr_char = text[0] if text else ""

    def _save(self) -> tuple[int, int, str]:
        return self.pos, self.read_pos, self.curr_char

    def _restore(self, state: tuple[int, int, str]) -> None:
        self.pos, self.read_pos, self.curr_char = state

    def advance(self) -> None:
        """Move to the next character, or past the end of the input."""
        if self.read_pos < len(self.text):
            self.curr_char = self.text[self.read_pos]
            self.pos = self.read_pos
            self.read_pos += 1
        else:
            self.curr_char = ""

    def look_forward(self) -> str:
        """Return the character after the current one, or '' at the end."""
        if self.read_pos >= len(self.text):
            return ""
        return self.text[self.read_pos]

    def skip_whitespace(self) -> None:
        """Advance past any run of whitespace."""
        while self.curr_char and is_whitespace(self.curr_char):
            self.advance()

    def skip_comment(self) -> bool:
        """Skip a '#' comment up to the end of the line; return whether one was skipped."""
        if self.curr_char != "#":
            return False
        while self.curr_char and self.curr_char != "\n":
            self.advance()
        return True

    def check_op_syntax(self) -> None:
        """Raise ShellSyntaxError if the operator at the cursor is misplaced."""
        nxt = self.look_forward()
        current = self.curr_char
        if current == "|" and self.pos == 0:
            raise ShellSyntaxError(_PIPE_AT_START, self.pos)
        if current in ("<", ">") and not nxt:
            raise ShellSyntaxError(_REDIR_AT_END, self.pos)
        if (current == ">" and nxt == "<") or (current == "<" and nxt == ">"):
            raise ShellSyntaxError(_CONSECUTIVE_REDIR, self.pos)

    def check_quote_end(self, quote: str) -> bool:
        """Return whether a closing ``quote`` follows the cursor; the cursor is kept."""
        state = self._save()
        try:
            self.advance()
            while self.curr_char:
                if self.curr_char == quote:
                    return True
                self.advance()
            return False
        finally:
            self._restore(state)

    def var_name_len(self) -> int:
        """Return the length of the variable name at the cursor without moving it."""
        state = self._save()
        length = 0
        while _is_name_char(self.curr_char):
            self.advance()
            length += 1
        self._restore(state)
        return length

    def read_operator(self) -> Token:
        """Read a pipe or redirection operator."""
        self.check_op_syntax()
        nxt = self.look_forward()
        start = self.pos
        current = self.curr_char
        if current in _DOUBLE_OPERATORS and nxt == current:
            kind, value = _DOUBLE_OPERATORS[current]
            self.advance()
            self.advance()
        elif current in _SINGLE_OPERATORS:
            kind, value = _SINGLE_OPERATORS[current], current
            self.advance()
        else:
            raise ShellSyntaxError(_INVALID_OPERATOR, start)
        return Token(kind, value, position=start)

    def read_quotes(self) -> Token:
        """Read a quoted string; the token holds the text between the quotes."""
        if not is_quote(self.curr_char):
            raise ValueError("read_quotes: cursor is not on a quote")
        before_quote = self._save()
        quote = self.curr_char
        self.advance()
        inside_start = self.pos
        length = 0
        while self.curr_char and self.curr_char != quote:
            self.advance()
            length += 1
        if not self.curr_char:
            self._restore(before_quote)
            raise ShellSyntaxError(_UNCLOSED_QUOTE, before_quote[0])
        content = self.text[inside_start:inside_start + length]
        self.advance()
        return Token(get_quote_type(quote), content, position=before_quote[0])

    def read_word(self) -> Token | None:
        """Read a plain word up to the next delimiter; None if there is none."""
        if not self.text:
            return None
        start = self.pos
        length = 0
        while self.curr_char and not is_delimiter(self.curr_char):
            length += 1
            self.advance()
        if length == 0:
            return None
        return Token(TokenType.WORD, self.text[start:start + length], position=start)

    def read_expand(self) -> Token:
        """Read a '$' and the variable name after it.

        A lone '$' gives a DOLLAR token; '$?' and '$NAME' give WORD tokens
        that keep the leading '$'.
        """
        if not is_expand_char(self.curr_char):
            raise ValueError("read_expand: cursor is not on '$'")
        start = self.pos
        self.advance()
        current = self.curr_char
        if not current or is_whitespace(current) or is_delimiter(current):
            return Token(TokenType.DOLLAR, "$", position=start)
        if current == "?":
            self.advance()
            return Token(TokenType.WORD, "$?", position=start)
        length = self.var_name_len()
        if length == 0:
            return Token(TokenType.DOLLAR, "$", position=start)
        name = self.text[self.pos:self.pos + length]
        for _ in range(length):
            self.advance()
        return Token(TokenType.WORD, "$" + name, position=start)

    def tokenize_current(self) -> Token | None:
        """Read the token at the cursor.

        Whitespace is skipped one character at a time and gives None.
        Raises ShellSyntaxError for malformed input.
        """
        if is_whitespace(self.curr_char):
            self.advance()
            return None
        start = self.pos
        current = self.curr_char
        if is_expand_char(current):
            token = self.read_expand()
        elif is_operator(current):
            token = self.read_operator()
        elif is_quote(current):
            token = self.read_quotes()
        else:
            token = self.read_word()
        if token is None:
            raise ShellSyntaxError(_TOKEN_FAILED, start)
        return token
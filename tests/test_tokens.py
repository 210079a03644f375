import pytest

from shellparse.tokens import (
    ShellSyntaxError,
    Token,
    TokenType,
    get_quote_type,
    is_delimiter,
    is_expand_char,
    is_operator,
    is_quote,
    is_redir_token,
    is_whitespace,
)


@pytest.mark.parametrize("c", [" ", "\t", "\n", "\r"])
def test_whitespace_characters(c):
    assert is_whitespace(c) is True


@pytest.mark.parametrize("c", ["a", "", "|", "$", "\v"])
def test_non_whitespace_characters(c):
    assert is_whitespace(c) is False


@pytest.mark.parametrize("c", [" ", "\t", "'", '"', "|", "<", ">", "$", "", "\0"])
def test_delimiters(c):
    assert is_delimiter(c) is True


@pytest.mark.parametrize("c", ["a", "-", "=", "_", "/", "?", "#"])
def test_non_delimiters(c):
    assert is_delimiter(c) is False


def test_operators():
    assert [is_operator(c) for c in "|<>a$"] == [True, True, True, False, False]


def test_quotes():
    assert [is_quote(c) for c in "'\"`a"] == [True, True, False, False]


def test_expand_char():
    assert is_expand_char("$") is True
    assert is_expand_char("?") is False


def test_get_quote_type():
    assert get_quote_type("'") is TokenType.QUOTES
    assert get_quote_type('"') is TokenType.DQUOTES
    assert get_quote_type("x") is TokenType.ERROR


def test_redir_token_types():
    redirs = {t for t in TokenType if is_redir_token(t)}
    assert redirs == {
        TokenType.REDIR_IN,
        TokenType.REDIR_OUT,
        TokenType.APPEND,
        TokenType.HEREDOC,
    }


def test_token_defaults():
    token = Token(TokenType.WORD, "ls")
    assert token.position == 0
    assert token.shrinked is None
    assert token == Token(TokenType.WORD, "ls", 0, None)


def test_syntax_error_carries_position():
    err = ShellSyntaxError("Syntax error", 4)
    assert err.position == 4
    assert err.message == "Syntax error"
    assert "Syntax error" in str(err)
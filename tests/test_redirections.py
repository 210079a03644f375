import os

import pytest

from shellparse.commands import Command
from shellparse.redirections import (
    expand_command_args,
    finalize_parsing,
    handle_redirection,
    setup_redirections,
    was_in_single_quotes,
)
from shellparse.tokens import Token, TokenType


def _close(cmd):
    if cmd.fd_in != 0:
        os.close(cmd.fd_in)
    if cmd.fd_out != 1:
        os.close(cmd.fd_out)


def test_handle_input_redirection():
    cmd = Command()
    handle_redirection(cmd, Token(TokenType.REDIR_IN, "<"), Token(TokenType.WORD, "in"))
    assert cmd.input_file == "in"
    assert cmd.redirs == [(TokenType.REDIR_IN, "in")]


@pytest.mark.parametrize(
    "kind, append", [(TokenType.REDIR_OUT, False), (TokenType.APPEND, True)]
)
def test_handle_output_redirection(kind, append):
    cmd = Command()
    handle_redirection(cmd, Token(kind), Token(TokenType.WORD, "out"))
    assert cmd.output_file == "out"
    assert cmd.append is append
    assert cmd.redirs == [(kind, "out")]


def test_handle_heredoc_redirection():
    cmd = Command()
    handle_redirection(cmd, Token(TokenType.HEREDOC, "<<"), Token(TokenType.WORD, "EOF"))
    assert cmd.heredoc is True
    assert cmd.delimiter == "EOF"


def test_handle_redirection_without_target_value():
    with pytest.raises(ValueError):
        handle_redirection(Command(), Token(TokenType.REDIR_IN), Token(TokenType.WORD))


def test_setup_truncates_output(tmp_path):
    path = tmp_path / "out.txt"
    path.write_text("old content")
    cmd = Command()
    cmd.set_output_file(str(path), False)
    setup_redirections(cmd)
    os.write(cmd.fd_out, b"new")
    _close(cmd)
    assert path.read_text() == "new"


def test_setup_appends_output(tmp_path):
    path = tmp_path / "out.txt"
    path.write_text("old ")
    cmd = Command()
    cmd.set_output_file(str(path), True)
    setup_redirections(cmd)
    os.write(cmd.fd_out, b"new")
    _close(cmd)
    assert path.read_text() == "old new"


def test_setup_opens_input(tmp_path):
    path = tmp_path / "in.txt"
    path.write_text("data")
    cmd = Command()
    cmd.set_input_file(str(path))
    setup_redirections(cmd)
    assert os.read(cmd.fd_in, 10) == b"data"
    _close(cmd)


def test_setup_missing_input_raises(tmp_path):
    cmd = Command()
    cmd.set_input_file(str(tmp_path / "missing"))
    with pytest.raises(FileNotFoundError):
        setup_redirections(cmd)


def test_was_in_single_quotes():
    tokens = [Token(TokenType.QUOTES, "$HOME"), Token(TokenType.DQUOTES, "$USER")]
    assert was_in_single_quotes("$HOME", tokens) is True
    assert was_in_single_quotes("$USER", tokens) is False


def test_expand_command_args_skips_single_quoted():
    cmd = Command()
    for word in ["echo", "$A", "$B", "plain"]:
        cmd.add_word(word)
    tokens = [Token(TokenType.QUOTES, "$B")]
    expand_command_args(cmd, tokens, lambda s: s.lower())
    assert cmd.argv == ["echo", "$a", "$B", "plain"]


def test_expand_command_args_keeps_arg_when_expander_fails():
    cmd = Command()
    cmd.add_word("$X")
    expand_command_args(cmd, [], lambda s: None)
    assert cmd.argv == ["$X"]


def test_finalize_without_arguments_returns_none():
    assert finalize_parsing(Command(), [], str.upper) is None
    assert finalize_parsing(None, [], str.upper) is None


def test_finalize_expands_and_opens(tmp_path):
    first = Command()
    first.add_word("cat")
    first.add_word("$v")
    second = first.pipe()
    second.add_word("wc")
    second.set_output_file(str(tmp_path / "o"), False)
    result = finalize_parsing(first, [], str.upper)
    assert result is first
    assert first.argv == ["cat", "$V"]
    assert second.fd_out != 1
    _close(second)
    assert (tmp_path / "o").exists()


def test_finalize_raises_and_closes(tmp_path):
    first = Command()
    first.add_word("cat")
    first.set_output_file(str(tmp_path / "o"), False)
    second = first.pipe()
    second.add_word("wc")
    second.set_input_file(str(tmp_path / "missing"))
    with pytest.raises(FileNotFoundError):
        finalize_parsing(first, [], str.upper)
    assert first.fd_out == 1
    assert second.fd_in == 0
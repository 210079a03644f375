# shellparse

The front end of a small interactive shell. It splits a command line into
tokens and joins each redirection operator to the word that follows it. It
also provides the pieces needed to build a pipeline of commands, each with
its own arguments, redirections and here-documents. It depends only on the
standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Tokenizing

```python
from shellparse.tokenizer import tokenize, apply_shrink

tokens = tokenize("cat < in.txt | grep 'a b' >> out.txt")
merged = apply_shrink(tokens)
```

`tokenize` returns a list of `Token` objects from `shellparse.tokens`. Each
token has `kind`, `value`, `position` and `shrinked`. The list always ends
with a `TokenType.EOF` token.

The following each become a single token:

- plain words,
- single-quoted strings (`TokenType.QUOTES`) and double-quoted strings
  (`TokenType.DQUOTES`), whose value is the text between the quotes,
- `$NAME` and `$?`, which become `WORD` tokens that keep the `$`,
- a lone `$` (`TokenType.DOLLAR`),
- the operators `|`, `<`, `>`, `<<` and `>>`.

Whitespace separates tokens. A `#` found where a token would begin starts a
comment that runs to the end of the line.

`shellparse.tokens.ShellSyntaxError` is raised in these cases:

- a quote is never closed,
- `|` is the first character of the line,
- `<` or `>` is the last character of the line,
- a mixed pair `<>` or `><` appears.

`apply_shrink` (also available as `shrink_redir_tokens` in
`shellparse.shrinker`) returns a new list and leaves its input unchanged. In
that list, every redirection token that is directly followed by a `WORD`
token has been merged with it. The merged token keeps the redirection's
type and position, takes the word's value, and records the word's type in
`shrinked`.

The character class helpers live in `shellparse.tokens`: `is_whitespace`,
`is_delimiter`, `is_operator`, `is_quote`, `is_expand_char`,
`get_quote_type` and `is_redir_token`. `shellparse.lexer.Lexer` is the
character cursor that `tokenize` drives. Its `read_*` methods can also be
called one at a time.

## Building commands

`shellparse.commands.Command` is one simple command in a pipeline:

- `add_word` appends an argument. The first word also sets `cmd`.
- `set_input_file` and `set_output_file(filename, append)` record file
  redirections.
- `pipe()` links a new `Command` through `next` and returns it.

`count_args` counts the `WORD` tokens of one command, up to a pipe or EOF.
`create_argv` collects up to a given number of word values. Both skip the
token that follows a redirection operator.

`shellparse.redirections` contains the following functions:

- `handle_redirection(cmd, token, target)` records a redirection on the
  command and appends `(kind, filename)` to `cmd.redirs`.
- `setup_redirections(cmd)` opens the input and output files. Output files
  are created with mode 0644 and truncated unless `append` is set. A file
  that cannot be opened raises `OSError`.
- `expand_command_args(cmd, tokens, expander)` passes each argument that
  contains `$` through your `expander` callable. An argument that matches
  the text of a single-quoted token is left alone.
- `finalize_parsing(commands, tokens, expander)` runs both steps over the
  whole pipeline. It returns `None` when the first command has no
  arguments. If opening a file fails, it closes the descriptors it had
  already opened and re-raises the error.

## Here-documents

`shellparse.heredoc` reads here-documents from a `read_line(prompt)`
callable that you supply. The callable returns `None` at end of input. The
default reads from `input()`.

```python
from shellparse.commands import Command
from shellparse.heredoc import handle_heredoc

lines = iter(["hello", "world", "EOF"])
cmd = Command()
heredoc = handle_heredoc(cmd, "EOF", lambda prompt: next(lines, None), None)
# heredoc.content == "hello\nworld\n"; cmd.fd_in reads the same text
```

Reading stops at the line that equals the delimiter. It also stops at end
of input, and then a warning is printed on standard error.

Lines are passed through `expander` when the `Heredoc` has `expand` set. A
delimiter with an odd number of quote characters clears that flag (see
`should_expand_heredoc`). SIGINT is ignored while lines are read on the
main thread.

Other helpers in this module:

- `is_valid_heredoc_delimiter` rejects delimiters that are empty or that
  contain blanks, `<`, `>` or `|`.
- `extract_heredoc_delimiter` returns the delimiter carried by a `HEREDOC`
  token, or by the word that follows it.

## Environment

`shellparse.environment.init_data(argv, envp)` builds a `ShellData` that
holds a copy of the environment list and the current directory. It raises
`ShellError` when `argv` is `None` or when the working directory cannot be
found.

For a shell started without an environment:

- `ShellData.create_minimal_env` sets `PWD`, `SHLVL` and `_`,
- `ShellData.add_default_env` adds `PATH`, `HOME` and `USER`.

`create_minimal_envp` and `create_env_entry` build the matching `KEY=value`
list. `exit_status` maps an `ErrorCode` to the status the shell exits with,
and unknown codes give 1.

## What this package does not do

This package parses and prepares input. It does not run anything. There is
no prompt loop, no command execution, no built-in commands and no command
to install. Variable expansion is not provided either: the functions that
need it take an `expander` callable that you supply.
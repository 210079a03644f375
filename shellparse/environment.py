"""Shell state, environment set-up and the exit status of error codes."""

from __future__ import annotations

import enum
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

_DEFAULT_ENV = (
    ("PATH", "/usr/local/bin:/usr/bin:/bin"),
    ("HOME", "/"),
    ("USER", "user"),
)
_SHLVL = "1"
_UNDERSCORE = "/usr/bin/env"


class ErrorCode(enum.IntEnum):
    """Error conditions the shell reports."""

    SUCCESS = 0
    MEMORY = 1
    ARGS = 2
    ENV = 3
    CWD = 4
    PIPE = 5
    FORK = 6
    EXEC = 7
    SYNTAX = 8


_EXIT_STATUS = {
    ErrorCode.SUCCESS: 0,
    ErrorCode.MEMORY: 1,
    ErrorCode.ARGS: 1,
    ErrorCode.ENV: 1,
    ErrorCode.CWD: 127,
    ErrorCode.PIPE: 1,
    ErrorCode.FORK: 1,
    ErrorCode.EXEC: 127,
}


def exit_status(code: ErrorCode | int) -> int:
    """Return the process exit status for an error code; unknown codes give 1."""
    try:
        return _EXIT_STATUS.get(ErrorCode(code), 1)
    except ValueError:
        return 1


class ShellError(Exception):
    """An error that ends shell set-up, carrying its error code."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        super().__init__(message or code.name.lower())
        self.code = code
        self.message = message

    @property
    def exit_status(self) -> int:
        """The exit status the shell leaves with for this error."""
        return exit_status(self.code)


def dup_env(envp: Iterable[str] | None) -> list[str]:
    """Return an independent copy of an environment list; None gives an empty list."""
    return list(envp) if envp is not None else []


def init_cwd() -> str:
    """Return the current working directory, raising ShellError(CWD) if it is gone."""
    try:
        return os.getcwd()
    except OSError as exc:
        raise ShellError(ErrorCode.CWD, str(exc)) from exc


def create_env_entry(key: str, value: str) -> str:
    """Join a key and a value into a ``KEY=value`` entry."""
    return f"{key}={value}"


def create_minimal_envp(cwd: str) -> list[str]:
    """Return the environment list used when the shell starts with none."""
    if cwd is None:
        raise ShellError(ErrorCode.ENV, "no working directory")
    return [
        create_env_entry("PWD", cwd),
        create_env_entry("SHLVL", _SHLVL),
        create_env_entry("_", _UNDERSCORE),
    ]


@dataclass
class ShellData:
    """Everything the shell keeps between input lines."""

    argv: list[str] = field(default_factory=list)
    envp: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    cwd: str | None = None
    exit: int = 0
    last_exit_status: int = 0
    input: str | None = None
    tokens: list[Any] = field(default_factory=list)
    commands: Any = None
    pid: int = 0
    is_child: bool = False
    state: int = 0

    def add_default_env(self) -> None:
        """Add the fallback PATH, HOME and USER variables."""
        for key, value in _DEFAULT_ENV:
            self.env[key] = value

    def create_minimal_env(self) -> None:
        """Set PWD, SHLVL and _ and replace ``envp`` with the matching list."""
        if self.cwd is None:
            raise ShellError(ErrorCode.ENV, "no working directory")
        self.env["PWD"] = self.cwd
        self.env["SHLVL"] = _SHLVL
        self.env["_"] = _UNDERSCORE
        self.envp = create_minimal_envp(self.cwd)


def init_data(argv: Iterable[str] | None, envp: Iterable[str] | None) -> ShellData:
    """Build the shell state from its arguments and environment.

    Raises ShellError(ARGS) without arguments and ShellError(CWD) when the
    working directory cannot be found.
    """
    if argv is None:
        raise ShellError(ErrorCode.ARGS, "no arguments")
    data = ShellData(argv=list(argv))
    data.envp = dup_env(envp)
    data.cwd = init_cwd()
    return data


__all__ = [
    "ErrorCode",
    "ShellError",
    "ShellData",
    "exit_status",
    "dup_env",
    "init_cwd",
    "create_env_entry",
    "create_minimal_envp",
    "init_data",
]
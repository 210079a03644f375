[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shellparse"
version = "0.1.0"
description = "Lexer, redirection shrinker and command-list builder for a small POSIX-like shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "lexer", "tokenizer", "parser", "heredoc", "redirection"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shellparse"]

[tool.pytest.ini_options]
addopts = "-ra"

"""
Sprig Command-Line Interface
============================

This package provides the command-line tools for Sprig:

- **sprig-lex**: tokenize source files and print the token stream

Each tool is implemented as a Click-based CLI application with
help text and consistent error reporting (see cli.errors).
"""

__all__ = ["sprig_lex"]

"""
minilang Command-Line Interface
===============================

This package provides the command-line tool for minilang:

- **mlcheck**: lex, parse and check one source file

The tool is implemented as a Click-based CLI application with
help text and uniform exit codes.
"""

__all__ = ["mlcheck"]

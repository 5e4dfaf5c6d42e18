"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes for mlcheck."""
    SUCCESS = 0
    FAILURE = 1          # Reported errors, bad arguments, unreadable input
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for the CLI.

    Formats the error message, optionally prints a traceback for
    internal errors in verbose mode, and exits with the matching code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from minilang.errors import MiniLangError, SourceError

    if isinstance(error, SourceError):
        # Message already reads "Error opening file: ..."
        click.echo(str(error), err=True)
        sys.exit(ExitCode.FAILURE)

    elif isinstance(error, MiniLangError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.FAILURE)

    elif isinstance(error, OSError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.FAILURE)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)

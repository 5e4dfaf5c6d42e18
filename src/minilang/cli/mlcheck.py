"""
mlcheck - minilang Checker Command-Line Interface
=================================================

This module implements the command-line interface for the minilang
front end. It checks one source file and prints the diagnostic trace.

Usage Examples
--------------
Check a program:
    $ mlcheck program.ml

Errors and verdict only:
    $ mlcheck -q program.ml

Debug logging:
    $ mlcheck -v program.ml

Exit Status
-----------
0   the file was read completely with no syntax or semantic error
1   wrong arguments, the file could not be opened, or errors were reported
3   internal error
"""

import logging
import sys
from pathlib import Path

import click

from minilang import __version__
from minilang.cli.errors import ExitCode, handle_cli_exception
from minilang.config import FrontEndOptions
from minilang.frontend import check_file

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Utilities
# =============================================================================

class CheckCommand(click.Command):
    """
    Click command whose usage errors exit with status 1.

    A missing or extra argument is a failed run like any other.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = ExitCode.FAILURE
            raise


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(cls=CheckCommand)
@click.argument(
    "source_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Only print errors and the final report",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Debug logging and tracebacks on internal errors",
)
@click.version_option(version=__version__, prog_name="mlcheck")
def main(source_file: Path, quiet: bool, verbose: bool) -> None:
    """
    Check a minilang program for syntax and semantic errors.

    SOURCE_FILE is the program to check.

    \b
    Language:
        int x = 5;          declaration
        x = x + 1;          assignment
        print(x);           print statement

    Every name must be declared before it is used. Checking stops
    admitting statements after the first error.
    """
    setup_logging(verbose)

    options = FrontEndOptions.from_env()
    if quiet:
        options.show_progress = False

    try:
        result = check_file(source_file, options, sink=click.echo)
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    logger.debug(f"{source_file}: exit status {result.exit_code}")
    sys.exit(ExitCode.SUCCESS if result.success else ExitCode.FAILURE)


if __name__ == "__main__":
    main()

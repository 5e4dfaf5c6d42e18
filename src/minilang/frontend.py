"""
minilang Front-End Driver
=========================

This module provides the main interface for checking minilang programs.
It wires a character source to a Parser session and packages the
outcome:

    Source → Lexer → Parser (+ Symbol Table, Diagnostics) → CheckResult

Usage
-----
Command line:
    $ mlcheck program.ml

Programmatic:
    >>> from minilang import check_source
    >>> result = check_source("int x = 5;\\nprint(x);\\n")
    >>> result.success, result.symbols
    (True, ['x'])

Files are opened with a context manager, so the handle is released on
every exit path, including runs that stop at the first error.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from minilang.config import FrontEndOptions, get_default_options
from minilang.diagnostics import TraceSink
from minilang.errors import MiniDiagnostic
from minilang.parser import ParseResult, Parser
from minilang.source import CharSource, FileSource, StringSource

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """
    Result of checking one source.

    Attributes:
        filename: Source filename
        success: True if no syntax or semantic error was reported
        syntax_errors: Number of syntax errors
        semantic_errors: Number of semantic errors
        symbols: Declared names in declaration order
        statements_parsed: Statements attempted before the run ended
        trace: Diagnostic trace, one entry per line
        errors: The recorded diagnostics
    """
    filename: str = ""
    success: bool = False
    syntax_errors: int = 0
    semantic_errors: int = 0
    symbols: List[str] = field(default_factory=list)
    statements_parsed: int = 0
    trace: List[str] = field(default_factory=list)
    errors: List[MiniDiagnostic] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        """Process exit status: 0 on success, 1 otherwise."""
        return 0 if self.success else 1

    @property
    def output(self) -> str:
        """The trace as printed text."""
        return "\n".join(self.trace) + "\n"

    @classmethod
    def from_parse(cls, parsed: ParseResult) -> "CheckResult":
        return cls(
            filename=parsed.filename,
            success=parsed.success,
            syntax_errors=parsed.syntax_errors,
            semantic_errors=parsed.semantic_errors,
            symbols=parsed.symbols,
            statements_parsed=parsed.statements_parsed,
            trace=parsed.trace,
            errors=parsed.errors,
        )


def check(
    source: CharSource,
    options: Optional[FrontEndOptions] = None,
    sink: Optional[TraceSink] = None,
) -> CheckResult:
    """
    Run one front-end session over a character source.

    The caller owns the source and is responsible for closing it.
    """
    options = options or get_default_options()
    parser = Parser(source, options, sink)
    return CheckResult.from_parse(parser.parse())


def check_source(
    source: str,
    filename: str = "<input>",
    options: Optional[FrontEndOptions] = None,
    sink: Optional[TraceSink] = None,
) -> CheckResult:
    """
    Check minilang source text.

    Args:
        source: Program text
        filename: Source name for diagnostics
        options: Front-end options (process defaults if None)
        sink: Optional callable receiving each trace line as emitted

    Returns:
        CheckResult with verdict, counts, symbols and trace

    Example:
        >>> check_source("x = 5;\\n").semantic_errors
        1
    """
    with StringSource(source, filename) as chars:
        return check(chars, options, sink)


def check_file(
    filepath,
    options: Optional[FrontEndOptions] = None,
    sink: Optional[TraceSink] = None,
) -> CheckResult:
    """
    Check a minilang source file.

    Args:
        filepath: Path to the source file
        options: Front-end options (process defaults if None)
        sink: Optional callable receiving each trace line as emitted

    Returns:
        CheckResult with verdict, counts, symbols and trace

    Raises:
        SourceError: If the file cannot be opened or decoded
    """
    options = options or get_default_options()
    path = Path(filepath)

    with FileSource.open(path, options.encoding) as chars:
        logger.debug(f"Checking {path}")
        return check(chars, options, sink)

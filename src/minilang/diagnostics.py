"""
Diagnostics
===========

Counts and formats syntax and semantic errors, owns the sticky failure
flag, and collects the trace a front-end run prints.

Every error is recorded at the point of detection:

1. its two-line block is written to the trace,
2. the matching counter (syntax or semantic) is incremented,
3. the fault flag is set.

Nothing ever clears the flag. The parser consults it to stop admitting
statements after the first error.

The trace is kept as a list of lines and, when a sink is given, also
streamed to it line by line (the CLI passes click.echo).
"""

import logging
from typing import Callable, List, Optional

from minilang.errors import (
    MiniDiagnostic,
    MiniSemanticError,
    MiniSyntaxError,
    SourceLocation,
)

logger = logging.getLogger(__name__)


TraceSink = Callable[[str], None]


class Diagnostics:
    """
    Error counters, fault flag and trace for one front-end session.

    Example:
        diagnostics = Diagnostics("test.ml")
        diagnostics.report_syntax_error("Expected ';' at end of declaration", 2, "print")
        assert diagnostics.has_error
        assert diagnostics.syntax_errors == 1

    Attributes:
        filename: Source name used in diagnostic locations
        syntax_errors: Number of syntax errors recorded
        semantic_errors: Number of semantic errors recorded
        errors: The recorded diagnostics, in order
        trace: Every line emitted so far
    """

    def __init__(
        self,
        filename: str = "<input>",
        sink: Optional[TraceSink] = None,
        show_progress: bool = True,
    ):
        self.filename = filename
        self.show_progress = show_progress
        self._sink = sink

        self.syntax_errors = 0
        self.semantic_errors = 0
        self._has_error = False

        self.errors: List[MiniDiagnostic] = []
        self.trace: List[str] = []

    @property
    def has_error(self) -> bool:
        """True once any error has been recorded. Never reset."""
        return self._has_error

    # =========================================================================
    # Trace Output
    # =========================================================================

    def emit(self, text: str = "") -> None:
        """Write one line to the trace."""
        self.trace.append(text)
        if self._sink is not None:
            self._sink(text)

    def progress(self, text: str) -> None:
        """Write a progress line, unless progress lines are disabled."""
        if self.show_progress:
            self.emit(text)

    # =========================================================================
    # Error Reporting
    # =========================================================================

    def location(self, line: int) -> SourceLocation:
        """Return a SourceLocation for a line of this session's source."""
        return SourceLocation(self.filename, line)

    def record(self, error: MiniDiagnostic) -> MiniDiagnostic:
        """
        Record a diagnostic built by the lexer or parser.

        Args:
            error: A MiniSyntaxError or MiniSemanticError instance

        Returns:
            The same diagnostic, for convenience
        """
        if isinstance(error, MiniSyntaxError):
            self.syntax_errors += 1
        elif isinstance(error, MiniSemanticError):
            self.semantic_errors += 1
        else:
            raise TypeError(f"cannot record {type(error).__name__} as a diagnostic")

        self._has_error = True
        self.errors.append(error)

        self.emit()
        for line in str(error).splitlines():
            self.emit(line)

        logger.debug(f"{error.location or self.filename}: {error.kind.lower()}: {error.message}")
        return error

    def report_syntax_error(self, message: str, line: int, lexeme: Optional[str]) -> MiniSyntaxError:
        """Record a syntax error with a plain message."""
        return self.record(MiniSyntaxError(message, self.location(line), lexeme))

    def report_semantic_error(self, message: str, line: int, lexeme: Optional[str]) -> MiniSemanticError:
        """Record a semantic error with a plain message."""
        return self.record(MiniSemanticError(message, self.location(line), lexeme))

    # =========================================================================
    # Summaries
    # =========================================================================

    def error_count(self) -> int:
        """Return the total number of recorded errors."""
        return self.syntax_errors + self.semantic_errors

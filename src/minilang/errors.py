"""
minilang Error Hierarchy
========================

This module defines the exception hierarchy for the minilang front end.
All exceptions inherit from MiniLangError, allowing callers to catch all
front-end errors with a single except clause if desired.

Exception Hierarchy
-------------------
MiniLangError (base)
├── SourceError - input file cannot be opened or decoded
└── MiniDiagnostic - diagnostics recorded while checking a program
    ├── MiniSyntaxError - lexer and parser syntax errors
    │   ├── InvalidCharacterError - unrecognized character
    │   ├── LexemeTooLongError - identifier/number over the lexeme bound
    │   └── MissingTokenError - expected token not found
    └── MiniSemanticError - declaration-before-use violations
        ├── UndeclaredIdentifierError - name used before declaration
        ├── DuplicateDeclarationError - name declared twice
        └── SymbolTableFullError - symbol table capacity exhausted

Diagnostics vs. Exceptions
--------------------------
Syntax and semantic problems are *recorded*, not raised: the parser builds
the matching MiniDiagnostic, hands it to Diagnostics, and carries on with its
local recovery. Only process-level failures (SourceError) are raised.

Diagnostic Format
-----------------
Each diagnostic renders as a header line and a token line:

    [SYNTAX ERROR] Line 2: Expected ';' at end of declaration
      Current token: 'print'
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class MiniLangError(Exception):
    """
    Base exception for all minilang errors.

        try:
            result = check_file("program.ml")
        except MiniLangError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A line in a source file, used to tag diagnostics.

    The front end tracks lines only; characters are consumed from a
    stream and no column bookkeeping is kept.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        """Format as 'filename:line' for log messages."""
        return f"{self.filename}:{self.line}"


# =============================================================================
# Process-Level Errors
# =============================================================================

class SourceError(MiniLangError):
    """
    The input source cannot be opened or read.

    Raised before any parsing begins, so no diagnostic trace is produced.

    Attributes:
        path: The path that failed to open
        reason: Description of the failure
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error opening file: {path} ({reason})")


# =============================================================================
# Recorded Diagnostics
# =============================================================================

class MiniDiagnostic(MiniLangError):
    """
    Base class for diagnostics recorded during a check.

    Attributes:
        message: The error description
        location: Where in the source the error was detected
        lexeme: Lexeme of the token current when the error was detected
    """

    # Header tag printed in the trace; overridden by the two error kinds
    kind = "ERROR"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        lexeme: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.lexeme = lexeme
        super().__init__(self._format_message())

    @property
    def line(self) -> int:
        """Line number of the diagnostic, 0 when unknown."""
        return self.location.line if self.location else 0

    def _format_message(self) -> str:
        """
        Format the diagnostic as its two trace lines.

        Example output:
            [SEMANTIC ERROR] Line 1: Variable 'x' used before declaration
              Current token: 'x'
        """
        parts = [f"[{self.kind}] Line {self.line}: {self.message}"]
        if self.lexeme is not None:
            parts.append(f"  Current token: '{self.lexeme}'")
        return "\n".join(parts)


# =============================================================================
# Syntax Errors (Lexer and Parser)
# =============================================================================

class MiniSyntaxError(MiniDiagnostic):
    """
    Syntax error in source code.

    Examples:
        - Unknown character
        - Missing ';' or ')'
        - Identifier or number too long
    """
    kind = "SYNTAX ERROR"


class InvalidCharacterError(MiniSyntaxError):
    """A character that starts no token of the language."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
    ):
        self.char = char
        super().__init__(
            f"Unknown character '{char}' (ASCII: {ord(char)})",
            location=location,
            lexeme=char,
        )


class LexemeTooLongError(MiniSyntaxError):
    """
    Identifier or number run longer than the lexeme bound.

    The lexeme is the truncated run, exactly max_length characters long.
    """

    def __init__(
        self,
        lexeme: str,
        is_number: bool,
        max_length: int,
        location: Optional[SourceLocation] = None,
    ):
        self.is_number = is_number
        self.max_length = max_length
        if is_number:
            message = "Number too long"
        else:
            message = f"Identifier too long (max {max_length} characters)"
        super().__init__(message, location=location, lexeme=lexeme)


class MissingTokenError(MiniSyntaxError):
    """
    Required token is missing.

    Raised when the parser expects a token kind (like ';' or ')') and
    the lookahead token is something else.
    """

    def __init__(
        self,
        message: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        lexeme: Optional[str] = None,
    ):
        self.expected = expected
        super().__init__(message, location=location, lexeme=lexeme)


# =============================================================================
# Semantic Errors
# =============================================================================

class MiniSemanticError(MiniDiagnostic):
    """
    Semantic error in source code.

    The program is syntactically correct but violates the
    declaration-before-use rules of the language.
    """
    kind = "SEMANTIC ERROR"


class UndeclaredIdentifierError(MiniSemanticError):
    """
    Reference to a name that has not been declared.

    The context tells where the name was used: "" for an assignment
    target, "in print()" or "in expression".
    """

    def __init__(
        self,
        identifier: str,
        context: str = "",
        location: Optional[SourceLocation] = None,
        lexeme: Optional[str] = None,
    ):
        self.identifier = identifier
        self.context = context
        where = f" {context}" if context else ""
        super().__init__(
            f"Variable '{identifier}' used{where} before declaration",
            location=location,
            lexeme=lexeme,
        )


class DuplicateDeclarationError(MiniSemanticError):
    """Name declared more than once."""

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        lexeme: Optional[str] = None,
    ):
        self.identifier = identifier
        super().__init__(
            f"Variable '{identifier}' already declared",
            location=location,
            lexeme=lexeme,
        )


class SymbolTableFullError(MiniSemanticError):
    """No room left in the symbol table for another declaration."""

    def __init__(
        self,
        identifier: str,
        capacity: int,
        location: Optional[SourceLocation] = None,
        lexeme: Optional[str] = None,
    ):
        self.identifier = identifier
        self.capacity = capacity
        super().__init__(
            f"Symbol table full (max {capacity} variables)",
            location=location,
            lexeme=lexeme,
        )

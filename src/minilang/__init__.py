"""
minilang - Single-Pass Front End for a Miniature Imperative Language
===================================================================

minilang checks programs written in a tiny language of integer
declarations, assignments, print statements and additive expressions:

    int x = 5;
    int y = x + 1;
    y = y + x + 2;
    print(y);

One pass over the source performs lexical analysis, predictive
recursive-descent parsing and declaration-before-use checking, and
produces a diagnostic trace with a SUCCESS/FAILED verdict.

Main Components
---------------
- **lexer**: characters → tokens, with a bounded lexeme buffer
- **parser**: grammar rules, panic-mode recovery, semantic checks
- **symbols**: fixed-capacity table of declared names
- **diagnostics**: error counters, sticky fault flag, trace
- **frontend**: check_source() / check_file() and CheckResult
- **cli**: the mlcheck command

Quick Start
-----------
    >>> from minilang import check_source
    >>> result = check_source("int x = 5;\\nprint(x);\\n")
    >>> print(result.output)

Or from the command line:
    $ mlcheck program.ml
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from minilang.config import FrontEndOptions, get_default_options, set_default_options
from minilang.diagnostics import Diagnostics
from minilang.errors import (
    MiniLangError,
    SourceError,
    SourceLocation,
    MiniDiagnostic,
    MiniSyntaxError,
    MiniSemanticError,
    InvalidCharacterError,
    LexemeTooLongError,
    MissingTokenError,
    UndeclaredIdentifierError,
    DuplicateDeclarationError,
    SymbolTableFullError,
)
from minilang.frontend import CheckResult, check, check_file, check_source
from minilang.lexer import Lexer, Token, TokenType
from minilang.parser import ParseResult, Parser
from minilang.source import CharSource, FileSource, StringSource
from minilang.symbols import DeclareStatus, Symbol, SymbolTable

__all__ = [
    # Version
    "__version__",
    # Main API
    "check",
    "check_source",
    "check_file",
    "CheckResult",
    "FrontEndOptions",
    "get_default_options",
    "set_default_options",
    # Components
    "CharSource",
    "StringSource",
    "FileSource",
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "ParseResult",
    "SymbolTable",
    "Symbol",
    "DeclareStatus",
    "Diagnostics",
    # Errors
    "MiniLangError",
    "SourceError",
    "SourceLocation",
    "MiniDiagnostic",
    "MiniSyntaxError",
    "MiniSemanticError",
    "InvalidCharacterError",
    "LexemeTooLongError",
    "MissingTokenError",
    "UndeclaredIdentifierError",
    "DuplicateDeclarationError",
    "SymbolTableFullError",
]

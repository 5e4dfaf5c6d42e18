"""
minilang Recursive Descent Parser
=================================

This module implements the predictive recursive descent parser for
minilang. It pulls tokens from the lexer one at a time (exactly one
token of lookahead), checks declarations against the symbol table as it
goes, and reports every problem through Diagnostics.

Grammar (EBNF)
--------------
program     ::= statement* EOF
statement   ::= declaration | assignment | print_stmt
declaration ::= 'int' IDENTIFIER '=' expression ';'
assignment  ::= IDENTIFIER '=' expression ';'
print_stmt  ::= 'print' '(' IDENTIFIER ')' ';'
expression  ::= term ('+' term)*
term        ::= IDENTIFIER | NUMBER

Each nonterminal picks its production from the type of the lookahead
token alone.

Error Policy
------------
An error is recorded where it is detected and sets the session's fault
flag. The rule that found it may skip ahead to a synchronizing token
(';' in a declaration, ')' in a print statement) so the lookahead is not
left stuck, but the top-level loop admits no further statement once the
flag is set: the first error ends the run.

Example Usage
-------------
>>> from minilang.parser import Parser
>>> result = Parser("int x = 5;\\nprint(x);\\n").parse()
>>> result.success
True
>>> result.symbols
['x']
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from minilang.config import FrontEndOptions
from minilang.diagnostics import Diagnostics, TraceSink
from minilang.errors import (
    DuplicateDeclarationError,
    MiniDiagnostic,
    MissingTokenError,
    SymbolTableFullError,
    UndeclaredIdentifierError,
)
from minilang.lexer import Lexer, Token, TokenType
from minilang.source import CharSource, StringSource
from minilang.symbols import DeclareStatus, SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """
    Outcome of parsing one source.

    Attributes:
        filename: Source name
        success: True when no error of either kind was reported
        syntax_errors: Number of syntax errors
        semantic_errors: Number of semantic errors
        symbols: Declared names in declaration order
        statements_parsed: Statements the top-level loop attempted
        trace: Every trace line, in order
        errors: The recorded diagnostics
    """
    filename: str = "<input>"
    success: bool = False
    syntax_errors: int = 0
    semantic_errors: int = 0
    symbols: List[str] = field(default_factory=list)
    statements_parsed: int = 0
    trace: List[str] = field(default_factory=list)
    errors: List[MiniDiagnostic] = field(default_factory=list)


class Parser:
    """
    Recursive descent parser and semantic checker for minilang.

    One Parser is one session: it owns the lexer, the symbol table and
    the diagnostics for a single source, and is discarded after parse().

    Attributes:
        filename: Source name for error reporting
        lexer: Token source
        symbols: Declared names
        diagnostics: Error counters, fault flag and trace
        statements_parsed: Statements attempted so far
    """

    def __init__(
        self,
        source: Union[CharSource, str],
        options: Optional[FrontEndOptions] = None,
        sink: Optional[TraceSink] = None,
    ):
        """
        Initialize the parser.

        Args:
            source: A CharSource, or source text
            options: Limits and trace settings (defaults if None)
            sink: Optional callable receiving each trace line as emitted
        """
        if isinstance(source, str):
            source = StringSource(source)
        options = options or FrontEndOptions()

        self.filename = source.name
        self.diagnostics = Diagnostics(
            self.filename,
            sink=sink,
            show_progress=options.show_progress,
        )
        self.symbols = SymbolTable(options.symbol_capacity)
        self.lexer = Lexer(source, self.diagnostics, options.max_lexeme_length)

        self.statements_parsed = 0
        self._current: Optional[Token] = None

    def parse(self) -> ParseResult:
        """
        Parse the whole program and emit the final report.

        Returns:
            ParseResult with counts, verdict, symbols and trace
        """
        self._emit("=== Starting Parse ===")
        self._emit()
        self._advance()

        while not self._check(TokenType.EOF) and not self.diagnostics.has_error:
            self.statements_parsed += 1
            self._parse_statement()

        success = not self.diagnostics.has_error
        self._emit()
        self._emit("=== Parse Complete ===")
        self._emit(f"Syntax Errors: {self.diagnostics.syntax_errors}")
        self._emit(f"Semantic Errors: {self.diagnostics.semantic_errors}")

        if success:
            self._emit("Status: SUCCESS")
            self._emit()
            for line in self.symbols.format_dump():
                self._emit(line)
        else:
            self._emit("Status: FAILED")

        logger.debug(
            f"{self.filename}: {self.statements_parsed} statements, "
            f"{self.diagnostics.error_count()} errors"
        )

        return ParseResult(
            filename=self.filename,
            success=success,
            syntax_errors=self.diagnostics.syntax_errors,
            semantic_errors=self.diagnostics.semantic_errors,
            symbols=self.symbols.names(),
            statements_parsed=self.statements_parsed,
            trace=list(self.diagnostics.trace),
            errors=list(self.diagnostics.errors),
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    @property
    def current(self) -> Token:
        """The lookahead token."""
        return self._current

    def _advance(self) -> Token:
        """Consume the lookahead token and fetch the next one."""
        consumed = self._current
        self._current = self.lexer.next_token()
        return consumed

    def _check(self, token_type: TokenType) -> bool:
        """Check if the lookahead token is of the given type."""
        return self._current is not None and self._current.type == token_type

    def _skip_to(self, token_type: TokenType) -> None:
        """
        Panic-mode recovery: discard tokens until token_type or EOF.

        The synchronizing token is consumed if found.
        """
        while not self._check(token_type) and not self._check(TokenType.EOF):
            self._advance()
        if self._check(token_type):
            self._advance()

    # =========================================================================
    # Trace and Error Helpers
    # =========================================================================

    def _emit(self, text: str = "") -> None:
        self.diagnostics.emit(text)

    def _progress(self, text: str) -> None:
        self.diagnostics.progress(text)

    def _syntax_error(self, message: str) -> None:
        """Report a syntax error at the lookahead token."""
        self.diagnostics.report_syntax_error(message, self.lexer.line, self._current.value)

    def _missing(self, message: str, expected: str) -> None:
        """Report that the lookahead is not the expected token."""
        self.diagnostics.record(
            MissingTokenError(
                message,
                expected=expected,
                location=self.diagnostics.location(self.lexer.line),
                lexeme=self._current.value,
            )
        )

    def _check_declared(self, name: str, context: str = "") -> None:
        """Report a semantic error if name has not been declared."""
        if not self.symbols.is_declared(name):
            self.diagnostics.record(
                UndeclaredIdentifierError(
                    name,
                    context,
                    location=self.diagnostics.location(self.lexer.line),
                    lexeme=self._current.value,
                )
            )

    def _declare(self, name: str) -> None:
        """Register name, reporting duplicates and a full table."""
        status = self.symbols.declare(name)
        if status is DeclareStatus.DECLARED:
            return

        location = self.diagnostics.location(self.lexer.line)
        lexeme = self._current.value
        if status is DeclareStatus.DUPLICATE:
            self.diagnostics.record(DuplicateDeclarationError(name, location, lexeme))
        else:
            self.diagnostics.record(
                SymbolTableFullError(name, self.symbols.capacity, location, lexeme)
            )

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> None:
        """
        Parse one statement, dispatching on the lookahead token.

        A token that cannot start a statement is reported and skipped.
        """
        if self._check(TokenType.KEYWORD_INT):
            self._parse_declaration()
        elif self._check(TokenType.KEYWORD_PRINT):
            self._parse_print_statement()
        elif self._check(TokenType.IDENTIFIER):
            self._parse_assignment()
        elif self._check(TokenType.UNKNOWN):
            self._syntax_error("Unexpected character in statement")
            self._advance()
        else:
            self._syntax_error("Expected statement (declaration, assignment, or print)")
            self._advance()

    def _parse_declaration(self) -> None:
        """
        Parse: 'int' IDENTIFIER '=' expression ';'

        A missing identifier skips to the next ';'. The name is declared
        as soon as it is read, before the initializer is parsed.
        """
        self._progress("Parsing declaration...")

        if not self._check(TokenType.KEYWORD_INT):
            self._missing("Expected 'int' keyword", "int")
            return
        self._progress(f"  Found keyword: {self._current.value}")
        self._advance()

        if not self._check(TokenType.IDENTIFIER):
            self._missing("Expected identifier after 'int'", "identifier")
            self._skip_to(TokenType.SEMICOLON)
            return

        name = self._current.value
        self._progress(f"  Found identifier: {name}")
        self._advance()

        self._declare(name)

        if not self._check(TokenType.ASSIGN):
            self._missing("Expected '=' operator after identifier", "=")
            return
        self._progress(f"  Found operator: {self._current.value}")
        self._advance()

        self._parse_expression()

        if not self._check(TokenType.SEMICOLON):
            self._missing("Expected ';' at end of declaration", ";")
            return
        self._progress(f"  Found symbol: {self._current.value}")
        self._progress("Declaration parsed successfully!")
        self._progress("")
        self._advance()

    def _parse_assignment(self) -> None:
        """
        Parse: IDENTIFIER '=' expression ';'

        An undeclared target is reported but parsing continues with it.
        There is no skipping here: a malformed assignment just stops.
        """
        self._progress("Parsing assignment...")

        if not self._check(TokenType.IDENTIFIER):
            self._missing("Expected identifier", "identifier")
            return

        name = self._current.value
        self._progress(f"  Found identifier: {name}")
        self._check_declared(name)
        self._advance()

        if not self._check(TokenType.ASSIGN):
            self._missing("Expected '=' operator", "=")
            return
        self._progress(f"  Found operator: {self._current.value}")
        self._advance()

        self._parse_expression()

        if not self._check(TokenType.SEMICOLON):
            self._missing("Expected ';' at end of assignment", ";")
            return
        self._progress(f"  Found symbol: {self._current.value}")
        self._progress("Assignment parsed successfully!")
        self._progress("")
        self._advance()

    def _parse_print_statement(self) -> None:
        """
        Parse: 'print' '(' IDENTIFIER ')' ';'

        A missing identifier skips to the next ')'.
        """
        self._progress("Parsing print statement...")

        if not self._check(TokenType.KEYWORD_PRINT):
            self._missing("Expected 'print' keyword", "print")
            return
        self._progress(f"  Found keyword: {self._current.value}")
        self._advance()

        if not self._check(TokenType.LPAREN):
            self._missing("Expected '(' after print", "(")
            return
        self._progress(f"  Found symbol: {self._current.value}")
        self._advance()

        if not self._check(TokenType.IDENTIFIER):
            self._missing("Expected identifier inside print()", "identifier")
            self._skip_to(TokenType.RPAREN)
            return

        name = self._current.value
        self._progress(f"  Found identifier: {name}")
        self._check_declared(name, "in print()")
        self._advance()

        if not self._check(TokenType.RPAREN):
            self._missing("Expected ')' after identifier", ")")
            return
        self._progress(f"  Found symbol: {self._current.value}")
        self._advance()

        if not self._check(TokenType.SEMICOLON):
            self._missing("Expected ';' at end of print statement", ";")
            return
        self._progress(f"  Found symbol: {self._current.value}")
        self._progress("Print statement parsed successfully!")
        self._progress("")
        self._advance()

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> None:
        """Parse: term ('+' term)*, left to right."""
        self._progress("  Parsing expression...")
        self._parse_term()

        while self._check(TokenType.PLUS):
            self._progress(f"    Found operator: {self._current.value}")
            self._advance()
            self._parse_term()

    def _parse_term(self) -> None:
        """Parse: IDENTIFIER | NUMBER"""
        if self._check(TokenType.IDENTIFIER):
            name = self._current.value
            self._progress(f"    Found identifier: {name}")
            self._check_declared(name, "in expression")
            self._advance()
        elif self._check(TokenType.NUMBER):
            self._progress(f"    Found number: {self._current.value}")
            self._advance()
        else:
            self._syntax_error("Expected identifier or number in expression")
            self._advance()

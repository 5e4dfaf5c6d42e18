"""
minilang Lexer (Tokenizer)
==========================

This module implements the lexer for minilang. It pulls characters from
a CharSource one at a time and hands the parser one token per call.

Token Categories
----------------
- Keywords: int, print
- Identifiers: a letter followed by letters and digits
- Numbers: a run of decimal digits
- Operators: = +
- Delimiters: ; ( )

Anything else is an UNKNOWN token and a syntax error.

Lexeme Bound
------------
Identifier and number runs are captured into a bounded lexeme
(49 characters by default). A run that reaches the bound is reported as
too long and ends there. Nothing past the bound is read, so the rest of
the run becomes the next token and the stream stays in step.

Example Usage
-------------
>>> from minilang.lexer import Lexer
>>> lexer = Lexer("int x = 5;")
>>> for token in lexer.tokenize():
...     print(token)
Token(KEYWORD_INT, 'int', line 1)
Token(IDENTIFIER, 'x', line 1)
Token(ASSIGN, '=', line 1)
Token(NUMBER, '5', line 1)
Token(SEMICOLON, ';', line 1)
Token(EOF, 'EOF', line 1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, Union
import logging
import string

from minilang.config import DEFAULT_MAX_LEXEME_LENGTH
from minilang.diagnostics import Diagnostics
from minilang.errors import (
    InvalidCharacterError,
    LexemeTooLongError,
    MiniSyntaxError,
    SourceLocation,
)
from minilang.source import CharSource, StringSource

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for minilang.

    Keywords are distinguished from identifiers so the parser can pick
    a production from the token type alone.
    """

    # === Keywords ===
    KEYWORD_INT = auto()    # int
    KEYWORD_PRINT = auto()  # print

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Variable names
    NUMBER = auto()         # Decimal integer literals

    # === Operators ===
    ASSIGN = auto()         # =
    PLUS = auto()           # +

    # === Delimiters ===
    SEMICOLON = auto()      # ;
    LPAREN = auto()         # (
    RPAREN = auto()         # )

    # === Structural ===
    EOF = auto()            # End of input
    UNKNOWN = auto()        # Unrecognized character


# Map keyword strings to their token types
KEYWORDS: dict[str, TokenType] = {
    "int": TokenType.KEYWORD_INT,
    "print": TokenType.KEYWORD_PRINT,
}

# Single character tokens
SINGLE_TOKENS: dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

# Lexeme carried by the end-of-input token
EOF_LEXEME = "EOF"


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token of minilang source.

    Attributes:
        type: The TokenType classification
        value: The lexeme, exactly as captured (truncated if too long)
        line: Line number the token was read on (1-indexed)
        filename: Name of the source
    """
    type: TokenType
    value: str
    line: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        return f"Token({self.type.name}, {self.value!r}, line {self.line})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes minilang source, one token per next_token() call.

    The lexer reports its own syntax errors (unknown characters, runs
    over the lexeme bound) through the session's Diagnostics and always
    returns a token, so the parser never has to handle an exception
    from it.

    Usage:
        lexer = Lexer(StringSource(text), diagnostics)
        token = lexer.next_token()

    Attributes:
        filename: Name of the source (for error reporting)
        max_lexeme_length: Longest identifier/number kept
        diagnostics: Where lexer errors are recorded
    """

    LETTERS = string.ascii_letters
    DIGITS = string.digits
    ALNUM = string.ascii_letters + string.digits
    WHITESPACE = string.whitespace

    def __init__(
        self,
        source: Union[CharSource, str],
        diagnostics: Optional[Diagnostics] = None,
        max_lexeme_length: int = DEFAULT_MAX_LEXEME_LENGTH,
    ):
        """
        Initialize the lexer.

        Args:
            source: A CharSource, or a string to read from
            diagnostics: Error sink (a private one is created if None)
            max_lexeme_length: Bound on identifier/number lexemes
        """
        if isinstance(source, str):
            source = StringSource(source)

        self._source = source
        self.filename = source.name
        self.max_lexeme_length = max_lexeme_length
        self.diagnostics = diagnostics or Diagnostics(self.filename)

        self._line = 1
        self._at_eof = False

    @property
    def line(self) -> int:
        """Current line number (1-indexed)."""
        return self._line

    def next_token(self) -> Token:
        """
        Consume characters and return the next token.

        Once end of input has been reached every call returns an EOF
        token without touching the source again.
        """
        if self._at_eof:
            return self._make_token(TokenType.EOF, EOF_LEXEME)

        char = self._skip_whitespace()

        if char == "":
            self._at_eof = True
            logger.debug(f"{self.filename}: end of input at line {self._line}")
            return self._make_token(TokenType.EOF, EOF_LEXEME)

        # Identifiers and keywords
        if char in self.LETTERS:
            return self._scan_word(char)

        # Numbers
        if char in self.DIGITS:
            return self._scan_number(char)

        # Operators and delimiters
        if char in SINGLE_TOKENS:
            return self._make_token(SINGLE_TOKENS[char], char)

        # Unknown character: report it and move past it
        token = self._make_token(TokenType.UNKNOWN, char)
        self._report(InvalidCharacterError(char, token.location))
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the EOF token.

        Yields:
            Token objects representing each lexical element
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    # =========================================================================
    # Scanning Helpers
    # =========================================================================

    def _skip_whitespace(self) -> str:
        """Skip whitespace, counting newlines; return the first other char."""
        char = self._source.read()
        while char != "" and char in self.WHITESPACE:
            if char == "\n":
                self._line += 1
            char = self._source.read()
        return char

    def _scan_word(self, first: str) -> Token:
        """
        Scan an identifier or keyword.

        Identifiers start with a letter and continue with letters and
        digits. Keywords are recognized by looking the finished lexeme
        up in the keyword table.
        """
        name = self._scan_run(first, self.ALNUM, is_number=False)

        if name in KEYWORDS:
            return self._make_token(KEYWORDS[name], name)

        return self._make_token(TokenType.IDENTIFIER, name)

    def _scan_number(self, first: str) -> Token:
        """Scan a decimal number."""
        digits = self._scan_run(first, self.DIGITS, is_number=True)
        return self._make_token(TokenType.NUMBER, digits)

    def _scan_run(self, first: str, allowed: str, is_number: bool) -> str:
        """
        Capture a run of allowed characters into a bounded lexeme.

        A run that reaches max_lexeme_length characters is reported as
        too long and ends there; the rest of the run is left in the
        source and lexes as the next token. The character that ends a
        shorter run is pushed back for the next call.
        """
        chars = [first]

        while len(chars) < self.max_lexeme_length:
            char = self._source.read()
            if char == "" or char not in allowed:
                self._source.unread(char)
                return "".join(chars)
            chars.append(char)

        lexeme = "".join(chars)
        self._report(
            LexemeTooLongError(
                lexeme,
                is_number,
                self.max_lexeme_length,
                SourceLocation(self.filename, self._line),
            )
        )
        return lexeme

    # =========================================================================
    # Token Creation and Errors
    # =========================================================================

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=self._line,
            filename=self.filename,
        )

    def _report(self, error: MiniSyntaxError) -> None:
        self.diagnostics.record(error)

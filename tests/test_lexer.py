# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the minilang lexer/tokenizer.
#
# Test coverage includes:
#   - Keywords, identifiers, numbers, operators and delimiters
#   - Whitespace skipping and line counting
#   - End-of-input idempotence
#   - Unknown characters
#   - The 49-character lexeme bound and resynchronization after it
# =============================================================================

import pytest

from minilang.diagnostics import Diagnostics
from minilang.errors import InvalidCharacterError, LexemeTooLongError
from minilang.lexer import Lexer, Token, TokenType
from minilang.source import StringSource


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str, **kwargs) -> list:
    """
    Helper to tokenize and drop the trailing EOF token.
    Tests are focused on meaningful tokens, not structural ones.
    """
    lexer = Lexer(source, **kwargs)
    return [t for t in lexer.tokenize() if t.type != TokenType.EOF]


def types(source: str) -> list:
    """Token types of source, without EOF."""
    return [t.type for t in tokenize(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source should produce only EOF token."""
        tokens = list(Lexer("").tokenize())
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].value == "EOF"

    def test_whitespace_only(self):
        """Whitespace-only source should produce only EOF token."""
        tokens = list(Lexer("   \n\t  \n  ").tokenize())
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_keywords(self):
        """Keywords should be tokenized correctly."""
        for text, expected_type in [
            ("int", TokenType.KEYWORD_INT),
            ("print", TokenType.KEYWORD_PRINT),
        ]:
            tokens = tokenize(text)
            assert tokens[0].type == expected_type
            assert tokens[0].value == text

    def test_keyword_prefix_is_identifier(self):
        """A longer word starting with a keyword is an identifier."""
        tokens = tokenize("integer printer")
        assert [t.type for t in tokens] == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]
        assert [t.value for t in tokens] == ["integer", "printer"]

    def test_keywords_are_case_sensitive(self):
        """Int and PRINT are ordinary identifiers."""
        assert types("Int PRINT") == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_identifiers(self):
        """Identifiers start with a letter and may contain digits."""
        for ident in ["x", "foo", "test123", "A1b2"]:
            tokens = tokenize(ident)
            assert len(tokens) == 1
            assert tokens[0].type == TokenType.IDENTIFIER
            assert tokens[0].value == ident

    def test_numbers(self):
        """Numbers keep their digits as the lexeme."""
        for text in ["0", "5", "42", "007"]:
            tokens = tokenize(text)
            assert tokens[0].type == TokenType.NUMBER
            assert tokens[0].value == text

    def test_number_followed_by_letters(self):
        """A digit run stops at the first letter."""
        tokens = tokenize("12ab")
        assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.IDENTIFIER]
        assert [t.value for t in tokens] == ["12", "ab"]

    def test_operators_and_delimiters(self):
        """Each single-character token maps to its type."""
        assert types("= + ; ( )") == [
            TokenType.ASSIGN,
            TokenType.PLUS,
            TokenType.SEMICOLON,
            TokenType.LPAREN,
            TokenType.RPAREN,
        ]

    def test_no_whitespace_needed(self):
        """Tokens need no separating whitespace."""
        tokens = tokenize("int x=5+y;")
        assert [t.value for t in tokens] == ["int", "x", "=", "5", "+", "y", ";"]

    def test_print_statement(self):
        """A full print statement."""
        assert types("print(x);") == [
            TokenType.KEYWORD_PRINT,
            TokenType.LPAREN,
            TokenType.IDENTIFIER,
            TokenType.RPAREN,
            TokenType.SEMICOLON,
        ]

    def test_token_repr(self):
        """Token repr shows type, lexeme and line."""
        token = Token(TokenType.IDENTIFIER, "x", 3)
        assert repr(token) == "Token(IDENTIFIER, 'x', line 3)"

    def test_token_location(self):
        """Tokens know their source location."""
        token = tokenize("x")[0]
        assert token.location.line == 1
        assert token.location.filename == "<input>"


# =============================================================================
# Line Tracking Tests
# =============================================================================

class TestLineTracking:
    """Test line counting while skipping whitespace."""

    def test_token_lines(self):
        """Each newline skipped advances the line counter."""
        tokens = tokenize("int\nx\n\ny")
        assert [t.line for t in tokens] == [1, 2, 4]

    def test_line_after_trailing_newlines(self):
        """Trailing newlines are counted when reaching EOF."""
        lexer = Lexer("x\n\n\n")
        lexer.next_token()
        assert lexer.line == 1
        eof = lexer.next_token()
        assert eof.type == TokenType.EOF
        assert lexer.line == 4

    def test_carriage_returns_and_tabs_are_whitespace(self):
        """Other whitespace is skipped without counting lines."""
        lexer = Lexer("\t\r\x0b\x0cx")
        token = lexer.next_token()
        assert token.value == "x"
        assert lexer.line == 1


# =============================================================================
# End of Input Tests
# =============================================================================

class CountingSource(StringSource):
    """StringSource that counts reads of the underlying text."""

    def __init__(self, text: str):
        super().__init__(text)
        self.raw_reads = 0

    def _read_raw(self) -> str:
        self.raw_reads += 1
        return super()._read_raw()


class TestEndOfInput:
    """Test that EOF is sticky and free of side effects."""

    def test_eof_repeats(self):
        """Every call after end of input returns EOF."""
        lexer = Lexer("x")
        assert lexer.next_token().type == TokenType.IDENTIFIER
        for _ in range(5):
            assert lexer.next_token().type == TokenType.EOF

    def test_eof_has_no_side_effects(self):
        """Repeated EOF calls neither read the source nor change state."""
        source = CountingSource("x\n")
        diagnostics = Diagnostics()
        lexer = Lexer(source, diagnostics)

        lexer.next_token()
        first_eof = lexer.next_token()
        reads = source.raw_reads
        line = lexer.line

        for _ in range(3):
            assert lexer.next_token() == first_eof

        assert source.raw_reads == reads
        assert lexer.line == line
        assert diagnostics.error_count() == 0
        assert diagnostics.trace == []


# =============================================================================
# Error Tests
# =============================================================================

class TestUnknownCharacters:
    """Test handling of characters outside the language."""

    def test_unknown_character_token(self):
        """An unknown character becomes an UNKNOWN token."""
        diagnostics = Diagnostics()
        lexer = Lexer("@", diagnostics)
        token = lexer.next_token()
        assert token.type == TokenType.UNKNOWN
        assert token.value == "@"

    def test_unknown_character_reported(self):
        """The character and its code are reported as a syntax error."""
        diagnostics = Diagnostics()
        Lexer("@", diagnostics).next_token()
        assert diagnostics.syntax_errors == 1
        assert diagnostics.has_error
        error = diagnostics.errors[0]
        assert isinstance(error, InvalidCharacterError)
        assert error.message == "Unknown character '@' (ASCII: 64)"
        assert error.lexeme == "@"

    def test_lexing_continues_after_unknown(self):
        """Lexing advances past the unknown character."""
        diagnostics = Diagnostics()
        tokens = tokenize("a_b", diagnostics=diagnostics)
        assert [t.type for t in tokens] == [
            TokenType.IDENTIFIER,
            TokenType.UNKNOWN,
            TokenType.IDENTIFIER,
        ]
        assert diagnostics.syntax_errors == 1

    @pytest.mark.parametrize("char", ["-", "*", "{", "$", "\"", "é"])
    def test_other_characters(self, char):
        """Characters outside the token set are all unknown."""
        diagnostics = Diagnostics()
        token = Lexer(char, diagnostics).next_token()
        assert token.type == TokenType.UNKNOWN
        assert diagnostics.syntax_errors == 1


class TestLexemeBound:
    """Test the 49-character lexeme bound."""

    def test_identifier_below_bound(self):
        """A 48-character identifier is accepted as is."""
        diagnostics = Diagnostics()
        tokens = tokenize("a" * 48, diagnostics=diagnostics)
        assert [t.value for t in tokens] == ["a" * 48]
        assert diagnostics.error_count() == 0

    def test_identifier_at_bound(self):
        """Reaching 49 characters is already too long."""
        diagnostics = Diagnostics()
        tokens = tokenize("a" * 49 + ";", diagnostics=diagnostics)
        assert [t.value for t in tokens] == ["a" * 49, ";"]
        assert diagnostics.syntax_errors == 1
        assert diagnostics.errors[0].message == "Identifier too long (max 49 characters)"

    def test_number_at_bound(self):
        diagnostics = Diagnostics()
        tokens = tokenize("1" * 49, diagnostics=diagnostics)
        assert [t.value for t in tokens] == ["1" * 49]
        assert diagnostics.errors[0].message == "Number too long"

    def test_nothing_read_past_bound(self):
        """The character after a bounded run is left in the source."""
        source = StringSource("abc)")
        lexer = Lexer(source, Diagnostics(), max_lexeme_length=3)
        assert lexer.next_token().value == "abc"
        assert source.read() == ")"

    def test_identifier_over_bound_truncated(self):
        """A longer identifier is truncated and reported."""
        diagnostics = Diagnostics()
        lexer = Lexer("a" * 55, diagnostics)
        token = lexer.next_token()
        assert token.type == TokenType.IDENTIFIER
        assert token.value == "a" * 49
        assert diagnostics.syntax_errors == 1
        error = diagnostics.errors[0]
        assert isinstance(error, LexemeTooLongError)
        assert error.message == "Identifier too long (max 49 characters)"
        assert error.lexeme == "a" * 49

    def test_stream_stays_in_step_after_long_identifier(self):
        """The rest of the run and everything after it lex normally."""
        diagnostics = Diagnostics()
        tokens = tokenize("a" * 55 + " = 1;\nprint(b);", diagnostics=diagnostics)
        assert [t.value for t in tokens] == [
            "a" * 49, "a" * 6, "=", "1", ";", "print", "(", "b", ")", ";",
        ]
        assert tokens[-1].line == 2
        assert diagnostics.syntax_errors == 1

    def test_number_over_bound(self):
        """Long numbers are truncated with their own message."""
        diagnostics = Diagnostics()
        tokens = tokenize("1" * 60, diagnostics=diagnostics)
        assert [t.value for t in tokens] == ["1" * 49, "1" * 11]
        assert all(t.type == TokenType.NUMBER for t in tokens)
        assert diagnostics.errors[0].message == "Number too long"

    def test_keyword_after_truncation_point(self):
        """A run split at the bound may leave a keyword behind."""
        tokens = tokenize("b" * 49 + "int")
        assert [t.type for t in tokens] == [TokenType.IDENTIFIER, TokenType.KEYWORD_INT]

    def test_custom_bound(self):
        """The bound is configurable."""
        diagnostics = Diagnostics()
        tokens = tokenize("abcd", diagnostics=diagnostics, max_lexeme_length=3)
        assert [t.value for t in tokens] == ["abc", "d"]
        assert diagnostics.errors[0].message == "Identifier too long (max 3 characters)"

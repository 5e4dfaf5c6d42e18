"""
minilang Configuration
======================

Front-end options: the fixed-capacity limits of the lexer and symbol
table, trace verbosity and input encoding. Configuration can come from:
- Default values (defined here)
- Environment variables (FrontEndOptions.from_env)
- Explicit construction by callers (the CLI, tests)

The limits default to a 49-character lexeme and a 100-entry symbol
table. Overflowing either is reported as an error, never grown.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os

logger = logging.getLogger(__name__)


# Capacity of the lexeme buffer, in characters
DEFAULT_MAX_LEXEME_LENGTH = 49

# Capacity of the symbol table, in entries
DEFAULT_SYMBOL_CAPACITY = 100


@dataclass
class FrontEndOptions:
    """
    Configuration for a front-end run.

    Attributes:
        max_lexeme_length: Identifier/number length reported as too long (default: 49)
        symbol_capacity: Maximum number of declared names (default: 100)
        show_progress: Emit per-rule progress lines in the trace
        encoding: Text encoding used when reading source files
    """

    max_lexeme_length: int = DEFAULT_MAX_LEXEME_LENGTH
    symbol_capacity: int = DEFAULT_SYMBOL_CAPACITY
    show_progress: bool = True
    encoding: str = "utf-8"

    def __post_init__(self):
        if self.max_lexeme_length < 1:
            raise ValueError(
                f"max_lexeme_length must be positive, got {self.max_lexeme_length}"
            )
        if self.symbol_capacity < 0:
            raise ValueError(
                f"symbol_capacity must not be negative, got {self.symbol_capacity}"
            )

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "FrontEndOptions":
        """
        Create FrontEndOptions from environment variables.

        Environment variables (all optional):
            MINILANG_MAX_LEXEME: Lexeme bound (integer)
            MINILANG_SYMBOL_CAPACITY: Symbol table capacity (integer)
            MINILANG_QUIET: Any of 1/true/yes disables progress lines
            MINILANG_ENCODING: Source file encoding

        Returns:
            FrontEndOptions with values from environment variables
        """
        options = cls()

        if max_lexeme := os.environ.get("MINILANG_MAX_LEXEME"):
            value = _parse_int("MINILANG_MAX_LEXEME", max_lexeme)
            if value is not None and value >= 1:
                options.max_lexeme_length = value

        if capacity := os.environ.get("MINILANG_SYMBOL_CAPACITY"):
            value = _parse_int("MINILANG_SYMBOL_CAPACITY", capacity)
            if value is not None and value >= 0:
                options.symbol_capacity = value

        if quiet := os.environ.get("MINILANG_QUIET"):
            options.show_progress = quiet.strip().lower() not in ("1", "true", "yes")

        if encoding := os.environ.get("MINILANG_ENCODING"):
            options.encoding = encoding

        return options


def _parse_int(name: str, text: str) -> Optional[int]:
    """Parse an integer environment value, logging and ignoring bad input."""
    try:
        return int(text)
    except ValueError:
        logger.warning(f"Ignoring {name}={text!r}: not an integer")
        return None


# ═══════════════════════════════════════════════════════════════════════════════
# DEFAULT OPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

_default_options: Optional[FrontEndOptions] = None


def get_default_options() -> FrontEndOptions:
    """
    Get the process-wide default options.

    Creates them from environment variables on first access.
    """
    global _default_options
    if _default_options is None:
        _default_options = FrontEndOptions.from_env()
    return _default_options


def set_default_options(options: Optional[FrontEndOptions]) -> None:
    """Replace the default options; None resets to the environment."""
    global _default_options
    _default_options = options

"""
Symbol Table
============

Append-only, fixed-capacity registry of declared names.

There is a single flat scope: names are compared case-sensitively,
entries are never removed or updated, and iteration follows declaration
order. declare() is the only mutator and refuses both duplicates and
declarations past capacity, returning a status instead of raising so the
parser can report the matching semantic error and keep going.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List

from minilang.config import DEFAULT_SYMBOL_CAPACITY

logger = logging.getLogger(__name__)


class DeclareStatus(Enum):
    """Outcome of SymbolTable.declare()."""
    DECLARED = auto()       # Name added
    DUPLICATE = auto()      # Name already present, table unchanged
    FULL = auto()           # Capacity reached, table unchanged


@dataclass(frozen=True)
class Symbol:
    """A declared name. Every entry in the table is declared."""
    name: str
    declared: bool = True


class SymbolTable:
    """
    Flat registry of declared names with a fixed capacity.

    Example:
        table = SymbolTable()
        table.declare("x")      # DeclareStatus.DECLARED
        table.declare("x")      # DeclareStatus.DUPLICATE
        table.is_declared("x")  # True
    """

    def __init__(self, capacity: int = DEFAULT_SYMBOL_CAPACITY):
        self.capacity = capacity
        self._symbols: List[Symbol] = []

    def is_declared(self, name: str) -> bool:
        """Return True if name has been declared (exact match)."""
        for symbol in self._symbols:
            if symbol.name == name:
                return True
        return False

    def declare(self, name: str) -> DeclareStatus:
        """
        Register a name.

        The duplicate check comes first, so redeclaring a name in a full
        table is still reported as a duplicate.

        Returns:
            DECLARED if added, DUPLICATE or FULL if refused
        """
        if self.is_declared(name):
            return DeclareStatus.DUPLICATE
        if len(self._symbols) >= self.capacity:
            return DeclareStatus.FULL

        self._symbols.append(Symbol(name))
        logger.debug(f"Declared '{name}' ({len(self._symbols)}/{self.capacity})")
        return DeclareStatus.DECLARED

    def names(self) -> List[str]:
        """Return declared names in declaration order."""
        return [symbol.name for symbol in self._symbols]

    def format_dump(self) -> List[str]:
        """
        Format the table for the end-of-run report.

        Returns:
            Lines of the dump block, with "(empty)" when nothing is declared
        """
        lines = ["=== Symbol Table ==="]
        if not self._symbols:
            lines.append("(empty)")
        else:
            for symbol in self._symbols:
                lines.append(f"  Variable: {symbol.name}")
        lines.append("====================")
        return lines

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_declared(name)

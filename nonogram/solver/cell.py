"""
Cell Module - Tri-state cell value for the user grid.
"""

from enum import Enum
from typing import Tuple


class CellState(Enum):
    """
    State of a single user-grid cell.

    States:
        EMPTY: Unknown / not yet decided
        FILLED: Confirmed part of a run
        BLOCKED: Marked impossible (will never be filled)
    """
    EMPTY = "empty"
    FILLED = "filled"
    BLOCKED = "blocked"

    @property
    def is_known(self) -> bool:
        """True for FILLED and BLOCKED cells."""
        return self is not CellState.EMPTY

    @property
    def symbol(self) -> str:
        """Single-character form used in logs and the CLI."""
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "CellState":
        """
        Parse a single-character cell symbol.

        Args:
            symbol: One of '#', 'x' or '.'

        Returns:
            Matching CellState

        Raises:
            ValueError: If the symbol is not recognised
        """
        for state, sym in _SYMBOLS.items():
            if sym == symbol:
                return state
        raise ValueError(f"Unknown cell symbol: {symbol!r}")

    def next_in_cycle(self) -> "CellState":
        """Click cycle used by the UI: empty -> filled -> blocked -> empty."""
        if self is CellState.EMPTY:
            return CellState.FILLED
        if self is CellState.FILLED:
            return CellState.BLOCKED
        return CellState.EMPTY


_SYMBOLS = {
    CellState.EMPTY: ".",
    CellState.FILLED: "#",
    CellState.BLOCKED: "x",
}

# A single row or column of the user grid
Line = Tuple[CellState, ...]


def parse_line(text: str) -> Line:
    """
    Build a line from its symbol string, e.g. "#.x..".

    Args:
        text: Symbol string

    Returns:
        Tuple of CellState values
    """
    return tuple(CellState.from_symbol(ch) for ch in text)

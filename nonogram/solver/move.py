"""
Move Module - A single deduced cell assignment and move selection.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .cell import CellState


# Confidence scores used by the line analyzers
DEFINITE_CONFIDENCE = 1.0
IMPOSSIBLE_CONFIDENCE = 0.8

REASON_DEFINITE = "Definite cell"
REASON_IMPOSSIBLE = "Impossible position"
REASON_EMPTY_LINE = "Empty line"


@dataclass(frozen=True)
class SolveMove:
    """
    A proposed assignment for one user-grid cell.

    Attributes:
        row: Row index
        col: Column index
        value: Target state, FILLED or BLOCKED
        confidence: Ranking score; higher wins among moves of the same kind
        reason: Short human-readable tag explaining the deduction
    """
    row: int
    col: int
    value: CellState
    confidence: float
    reason: str

    def __post_init__(self):
        if self.value is CellState.EMPTY:
            raise ValueError("A move must fill or block a cell, not clear it")

    @classmethod
    def for_line(cls, is_row: bool, line_index: int, cell_index: int,
                 value: CellState, confidence: float, reason: str) -> "SolveMove":
        """
        Create a move from line-local coordinates.

        Args:
            is_row: True if the line is a row, False for a column
            line_index: Index of the row/column in the grid
            cell_index: Position of the cell within the line
            value: FILLED or BLOCKED
            confidence: Ranking score
            reason: Deduction tag

        Returns:
            SolveMove with grid coordinates
        """
        if is_row:
            return cls(row=line_index, col=cell_index, value=value,
                       confidence=confidence, reason=reason)
        return cls(row=cell_index, col=line_index, value=value,
                   confidence=confidence, reason=reason)

    @property
    def is_fill(self) -> bool:
        """True if this move fills its cell."""
        return self.value is CellState.FILLED

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)


def move_priority(move: SolveMove) -> Tuple[int, float]:
    """Sort key: fills before blocks, then higher confidence first."""
    return (0 if move.is_fill else 1, -move.confidence)


def select_best_move(moves: Iterable[SolveMove]) -> Optional[SolveMove]:
    """
    Pick the single move to play next.

    Fill moves always beat block moves regardless of confidence;
    within a kind, higher confidence wins. Ties keep the order in
    which the moves were supplied.

    Args:
        moves: Candidate moves

    Returns:
        Best move, or None if there are no candidates
    """
    ordered = sorted(moves, key=move_priority)
    return ordered[0] if ordered else None

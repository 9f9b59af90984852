"""
Hints Module - Run-length clues derived from a solution grid.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from .board import SolutionGrid


# Run lengths for one line; (0,) means the line has no filled cells
LineHints = Tuple[int, ...]

EMPTY_LINE_HINT: LineHints = (0,)


@dataclass(frozen=True)
class Hints:
    """
    Row and column clues for a puzzle.

    Attributes:
        rows: One LineHints per row, top to bottom
        columns: One LineHints per column, left to right
    """
    rows: Tuple[LineHints, ...]
    columns: Tuple[LineHints, ...]

    @property
    def shape(self) -> Tuple[int, int]:
        """(row count, column count) these hints describe."""
        return (len(self.rows), len(self.columns))

    def for_line(self, is_row: bool, index: int) -> LineHints:
        return self.rows[index] if is_row else self.columns[index]


def encode_line(cells: Iterable[bool]) -> LineHints:
    """
    Encode one line as the lengths of its filled runs.

    Args:
        cells: Filled flags in scan order

    Returns:
        Run lengths, or (0,) for a line with no filled cells
    """
    runs = []
    count = 0
    for cell in cells:
        if cell:
            count += 1
        elif count > 0:
            runs.append(count)
            count = 0
    if count > 0:
        runs.append(count)
    return tuple(runs) if runs else EMPTY_LINE_HINT


def generate_hints(solution: SolutionGrid) -> Hints:
    """
    Derive row and column hints from a solution grid.

    Rows are scanned left to right and columns top to bottom.

    Args:
        solution: Binary solution grid

    Returns:
        Hints for every row and column

    Raises:
        ValueError: If the grid has no rows
    """
    if not solution:
        raise ValueError("Cannot generate hints for an empty grid")

    rows = tuple(encode_line(row) for row in solution)
    columns = tuple(
        encode_line(row[col] for row in solution)
        for col in range(len(solution[0]))
    )
    return Hints(rows=rows, columns=columns)


def required_length(hints: LineHints) -> int:
    """Minimum line length that can host these hints (runs plus one-cell gaps)."""
    if hints == EMPTY_LINE_HINT:
        return 0
    return sum(hints) + max(0, len(hints) - 1)

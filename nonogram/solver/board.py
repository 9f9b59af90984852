"""
Board Module - Immutable user grid and solution grid helpers.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, TYPE_CHECKING

from .cell import CellState, Line

if TYPE_CHECKING:
    from .move import SolveMove


# Binary solution grid: True = filled
SolutionGrid = Tuple[Tuple[bool, ...], ...]


def to_solution_grid(grid: Iterable[Iterable[bool]]) -> SolutionGrid:
    """
    Freeze a 2D iterable of truthy values into a solution grid.

    Args:
        grid: Rows of filled flags

    Returns:
        Tuple-of-tuples of bools

    Raises:
        ValueError: If the grid is empty or ragged
    """
    frozen = tuple(tuple(bool(cell) for cell in row) for row in grid)
    if not frozen or not frozen[0]:
        raise ValueError("Solution grid must have at least one row and one column")
    width = len(frozen[0])
    if any(len(row) != width for row in frozen):
        raise ValueError("Solution grid rows must all have the same length")
    return frozen


@dataclass(frozen=True)
class UserGrid:
    """
    Immutable tri-state grid the player (or the solver) fills in.

    Uses tuple-of-tuples for hashability and immutability. Every
    edit returns a new UserGrid; the original is never changed.

    Attributes:
        cells: Tuple of rows, each a tuple of CellState values
    """
    cells: Tuple[Tuple[CellState, ...], ...]

    @classmethod
    def empty(cls, rows: int, cols: int) -> "UserGrid":
        """
        Create an all-EMPTY grid.

        Args:
            rows: Number of rows
            cols: Number of columns

        Returns:
            UserGrid with every cell EMPTY
        """
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        row = tuple(CellState.EMPTY for _ in range(cols))
        return cls(cells=tuple(row for _ in range(rows)))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[CellState]]) -> "UserGrid":
        """
        Create a UserGrid from a 2D list of CellState values.

        Args:
            rows: 2D list of CellState

        Returns:
            UserGrid instance
        """
        return cls(cells=tuple(tuple(row) for row in rows))

    @classmethod
    def from_solution(cls, solution: SolutionGrid, blocked_empty: bool = True) -> "UserGrid":
        """
        Build the finished user grid for a solution.

        Args:
            solution: Binary solution grid
            blocked_empty: Mark unfilled cells BLOCKED (True) or leave them EMPTY

        Returns:
            UserGrid mirroring the solution
        """
        other = CellState.BLOCKED if blocked_empty else CellState.EMPTY
        return cls(cells=tuple(
            tuple(CellState.FILLED if cell else other for cell in row)
            for row in solution
        ))

    @property
    def rows(self) -> int:
        """Get number of rows in grid."""
        return len(self.cells)

    @property
    def cols(self) -> int:
        """Get number of columns in grid."""
        return len(self.cells[0]) if self.rows > 0 else 0

    def get_cell(self, row: int, col: int) -> CellState:
        """
        Get value at specific cell position.

        Raises:
            IndexError: If the position is outside the grid
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid")
        return self.cells[row][col]

    def row(self, index: int) -> Line:
        return self.cells[index]

    def column(self, index: int) -> Line:
        return tuple(row[index] for row in self.cells)

    def set_cell(self, row: int, col: int, value: CellState) -> "UserGrid":
        """
        Return a new grid with one cell changed.

        Args:
            row: Row index
            col: Column index
            value: New cell value

        Returns:
            New UserGrid; self is unchanged
        """
        self.get_cell(row, col)
        new_row = self.cells[row][:col] + (value,) + self.cells[row][col + 1:]
        return UserGrid(cells=self.cells[:row] + (new_row,) + self.cells[row + 1:])

    def apply_move(self, move: "SolveMove") -> "UserGrid":
        """Apply a solver move to create a new grid."""
        return self.set_cell(move.row, move.col, move.value)

    def count(self, state: CellState) -> int:
        """Count cells holding the given state."""
        return sum(1 for row in self.cells for cell in row if cell is state)

    def matches_solution(self, solution: SolutionGrid) -> bool:
        """
        Check whether the filled cells are exactly the solution's.

        BLOCKED and EMPTY are equivalent here: only FILLED cells count.
        """
        if len(solution) != self.rows or any(len(r) != self.cols for r in solution):
            return False
        for r in range(self.rows):
            for c in range(self.cols):
                if (self.cells[r][c] is CellState.FILLED) != solution[r][c]:
                    return False
        return True

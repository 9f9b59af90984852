"""
Solve Result Module - Outcome of running a strategy to a standstill.
"""

from dataclasses import dataclass, field
from typing import List

from .board import UserGrid
from .move import SolveMove


@dataclass
class SolveMetrics:
    """
    Performance metrics for a solve run.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        lines_analyzed: Row/column analyses performed
        candidates_considered: Candidate moves collected across all steps
        strategy_name: Name of strategy that produced the result
    """
    computation_time_ms: float = 0.0
    lines_analyzed: int = 0
    candidates_considered: int = 0
    strategy_name: str = ""


@dataclass
class SolveResult:
    """
    Result of a strategy's step loop.

    Attributes:
        moves: Moves in the order they were applied
        grids: Grid after each move (first is the initial grid)
        is_solved: True if the final grid matches the solution
        was_cancelled: True if stopped by the context before finishing
        metrics: Performance statistics
    """
    moves: List[SolveMove] = field(default_factory=list)
    grids: List[UserGrid] = field(default_factory=list)
    is_solved: bool = False
    was_cancelled: bool = False
    metrics: SolveMetrics = field(default_factory=SolveMetrics)

    @property
    def move_count(self) -> int:
        """Number of moves applied."""
        return len(self.moves)

    @property
    def final_grid(self) -> UserGrid:
        """Grid after the last applied move."""
        return self.grids[-1]

    @property
    def is_stuck(self) -> bool:
        """True if line deduction ran out of moves before solving."""
        return not self.is_solved and not self.was_cancelled

    def get_grid_after_move(self, index: int) -> UserGrid:
        """
        Get grid state after applying the move at index.

        Raises:
            IndexError: If index out of range
        """
        return self.grids[index + 1]

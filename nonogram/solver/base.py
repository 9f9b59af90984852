"""
Base Strategy Module - Abstract base class for line analyzers.

A strategy decides which cells of one line are forced by its hints.
The base class runs a strategy across the whole grid, picks the
best move, and drives the step loop.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional

from .board import UserGrid
from .cell import CellState, Line
from .context import SolveContext
from .hints import EMPTY_LINE_HINT, Hints, LineHints
from .line import line_complete
from .move import (
    IMPOSSIBLE_CONFIDENCE,
    REASON_EMPTY_LINE,
    SolveMove,
    select_best_move,
)
from .solution import SolveMetrics, SolveResult

logger = logging.getLogger(__name__)


class LineDeduction(NamedTuple):
    """A forced cell within one line, before grid coordinates are known."""
    index: int
    value: CellState
    confidence: float
    reason: str


class SolverStrategy(ABC):
    """
    Abstract base class for all line-analysis strategies.

    Subclasses implement deduce() and define name and description
    class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for UI
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def deduce(self, line: Line, hints: LineHints) -> List[LineDeduction]:
        """
        Find forced cells in a line whose hints are not (0,).

        Must never return a deduction for a FILLED or BLOCKED cell
        and must not modify the line.

        Args:
            line: Line contents
            hints: Run lengths for the line

        Returns:
            Deductions in any order; empty if nothing is forced
        """
        pass

    def analyze_line(self, line: Line, hints: LineHints,
                     is_row: bool = True, line_index: int = 0) -> List[SolveMove]:
        """
        Deduce forced cells for one row or column.

        A line whose hint is (0,) has every unknown cell blocked
        without further analysis.

        Args:
            line: Line contents
            hints: Run lengths for the line
            is_row: True if the line is a row, False for a column
            line_index: Index of the line in the grid

        Returns:
            Moves in grid coordinates
        """
        line = tuple(line)
        if tuple(hints) == EMPTY_LINE_HINT:
            deductions = [
                LineDeduction(i, CellState.BLOCKED, IMPOSSIBLE_CONFIDENCE, REASON_EMPTY_LINE)
                for i, cell in enumerate(line)
                if not cell.is_known
            ]
        else:
            deductions = self.deduce(line, tuple(hints))

        return [
            SolveMove.for_line(is_row, line_index, d.index, d.value, d.confidence, d.reason)
            for d in deductions
            if not line[d.index].is_known
        ]

    def find_all_moves(self, grid: UserGrid, hints: Hints) -> List[SolveMove]:
        """
        Run the line analysis over every row, then every column.

        Args:
            grid: Current user grid
            hints: Puzzle hints

        Returns:
            All candidate moves, rows first (top to bottom) then
            columns (left to right)

        Raises:
            ValueError: If the hints do not describe a grid of this shape
        """
        if hints.shape != (grid.rows, grid.cols):
            raise ValueError(
                f"Hints describe a {hints.shape[0]}x{hints.shape[1]} grid, "
                f"got a {grid.rows}x{grid.cols} grid"
            )

        moves: List[SolveMove] = []
        for r in range(grid.rows):
            moves.extend(self.analyze_line(grid.row(r), hints.rows[r], True, r))
        for c in range(grid.cols):
            moves.extend(self.analyze_line(grid.column(c), hints.columns[c], False, c))
        return moves

    def find_best_move(self, grid: UserGrid, hints: Hints) -> Optional[SolveMove]:
        """
        Find the single best move on the grid.

        Fill moves beat block moves, then higher confidence wins.

        Args:
            grid: Current user grid
            hints: Puzzle hints

        Returns:
            Best SolveMove, or None when no line yields a deduction
        """
        return select_best_move(self.find_all_moves(grid, hints))

    def solve(self, context: SolveContext) -> SolveResult:
        """
        Apply best moves one at a time until none remain.

        Stops early once the grid matches the context's solution, if
        one is given. Cancellation (and the optional step limit) is
        checked before each move is applied.

        Args:
            context: Solve context with grid, hints and cancellation

        Returns:
            SolveResult with the applied moves and metrics
        """
        start_time = time.perf_counter()

        grid = context.grid
        moves: List[SolveMove] = []
        grids: List[UserGrid] = [grid]
        lines_analyzed = 0
        candidates = 0
        was_cancelled = False
        total_cells = grid.rows * grid.cols

        while True:
            if context.solution is not None and grid.matches_solution(context.solution):
                break

            candidate_moves = self.find_all_moves(grid, context.hints)
            lines_analyzed += grid.rows + grid.cols
            candidates += len(candidate_moves)

            best_move = select_best_move(candidate_moves)
            if best_move is None:
                break

            if self._check_cancelled(context, len(moves)):
                was_cancelled = True
                break

            grid = grid.apply_move(best_move)
            moves.append(best_move)
            grids.append(grid)

            known = total_cells - grid.count(CellState.EMPTY)
            context.report_progress(
                min(0.99, known / total_cells),
                f"{len(moves)} moves, {known}/{total_cells} cells decided"
            )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        is_solved = self._is_solved(grid, context)
        logger.debug(
            f"{self.name}: {len(moves)} moves in {elapsed_ms:.1f}ms, "
            f"solved={is_solved}, cancelled={was_cancelled}"
        )

        return SolveResult(
            moves=moves,
            grids=grids,
            is_solved=is_solved,
            was_cancelled=was_cancelled,
            metrics=SolveMetrics(
                computation_time_ms=elapsed_ms,
                lines_analyzed=lines_analyzed,
                candidates_considered=candidates,
                strategy_name=self.name,
            )
        )

    def _check_cancelled(self, context: SolveContext, steps_taken: int) -> bool:
        """True if the context was cancelled or the step limit is reached."""
        if context.is_cancelled():
            return True
        return context.max_steps is not None and steps_taken >= context.max_steps

    @staticmethod
    def _is_solved(grid: UserGrid, context: SolveContext) -> bool:
        if context.solution is not None:
            return grid.matches_solution(context.solution)
        return all_lines_complete(grid, context.hints)


def all_lines_complete(grid: UserGrid, hints: Hints) -> bool:
    """True if every row and column shows exactly its hinted runs."""
    rows_ok = all(line_complete(grid.row(r), hints.rows[r]) for r in range(grid.rows))
    cols_ok = all(line_complete(grid.column(c), hints.columns[c]) for c in range(grid.cols))
    return rows_ok and cols_ok

"""
Overlap Strategy - Tracks each hint's placements separately.
"""

from typing import List

from ..base import LineDeduction, SolverStrategy
from ..cell import CellState, Line
from ..factory import register_strategy
from ..hints import LineHints
from ..line import feasible_starts
from ..move import (
    DEFINITE_CONFIDENCE,
    IMPOSSIBLE_CONFIDENCE,
    REASON_DEFINITE,
    REASON_IMPOSSIBLE,
)


@register_strategy
class OverlapStrategy(SolverStrategy):
    """
    Line analysis over the start positions of each hint.

    A start is kept for a hint only if a complete arrangement of the
    line uses it. A cell covered by every kept start of one hint must
    be filled; a cell covered by no kept start of any hint must be
    blocked. Both rules are sound, so every move agrees with any
    solution consistent with the line.

    Lines with no consistent arrangement produce no moves.
    """
    name = "overlap"
    description = "Overlap - Per-hint placement analysis"

    def deduce(self, line: Line, hints: LineHints) -> List[LineDeduction]:
        starts = feasible_starts(line, hints)
        if starts is None:
            return []

        length = len(line)
        covered_by_any = [False] * length
        covered_by_all = [False] * length

        for block_length, positions in zip(hints, starts):
            if not positions:
                continue
            for start in positions:
                for i in range(start, start + block_length):
                    covered_by_any[i] = True
            # Overlap of the left-most and right-most placements
            for i in range(positions[-1], positions[0] + block_length):
                covered_by_all[i] = True

        deductions: List[LineDeduction] = []
        for i, cell in enumerate(line):
            if cell is not CellState.EMPTY:
                continue
            if covered_by_all[i]:
                deductions.append(
                    LineDeduction(i, CellState.FILLED, DEFINITE_CONFIDENCE, REASON_DEFINITE)
                )
            elif not covered_by_any[i]:
                deductions.append(
                    LineDeduction(i, CellState.BLOCKED, IMPOSSIBLE_CONFIDENCE, REASON_IMPOSSIBLE)
                )
        return deductions

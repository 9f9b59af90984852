"""
Positional Strategy - Merges every hint's placements into one mask.
"""

from typing import List

from ..base import LineDeduction, SolverStrategy
from ..cell import CellState, Line
from ..factory import register_strategy
from ..hints import LineHints
from ..line import can_place_block, prefix_feasible, with_block, with_cell
from ..move import (
    DEFINITE_CONFIDENCE,
    IMPOSSIBLE_CONFIDENCE,
    REASON_DEFINITE,
    REASON_IMPOSSIBLE,
)


@register_strategy
class PositionalStrategy(SolverStrategy):
    """
    Line analysis using a single merged "possible" mask.

    For each hint, every admissible start that keeps the line
    prefix-feasible contributes its cells to that hint's mask. The
    masks of all hints are ANDed position by position, which loses
    track of which hint covers which cell: it can propose fills that
    deeper analysis would not confirm.
    """
    name = "positional"
    description = "Positional mask - Fast merged-mask line analysis"

    def deduce(self, line: Line, hints: LineHints) -> List[LineDeduction]:
        length = len(line)
        possible = [True] * length

        for block_length in hints:
            block_positions = [False] * length
            for start in range(0, length - block_length + 1):
                if not can_place_block(line, start, block_length):
                    continue
                if prefix_feasible(with_block(line, start, block_length), hints):
                    for i in range(start, start + block_length):
                        block_positions[i] = True
            possible = [a and b for a, b in zip(possible, block_positions)]

        deductions: List[LineDeduction] = []
        for i, cell in enumerate(line):
            if cell is not CellState.EMPTY or not possible[i]:
                continue
            if prefix_feasible(with_cell(line, i, CellState.FILLED), hints):
                deductions.append(
                    LineDeduction(i, CellState.FILLED, DEFINITE_CONFIDENCE, REASON_DEFINITE)
                )

        for i, cell in enumerate(line):
            if cell is not CellState.EMPTY or possible[i]:
                continue
            if prefix_feasible(with_cell(line, i, CellState.BLOCKED), hints):
                deductions.append(
                    LineDeduction(i, CellState.BLOCKED, IMPOSSIBLE_CONFIDENCE, REASON_IMPOSSIBLE)
                )

        return deductions

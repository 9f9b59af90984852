"""
Line Module - Single row/column checks shared by the line analyzers.

A line is a tuple of CellState values; hints are the run lengths the
line must eventually show, with (0,) meaning "no filled cells".
"""

from typing import List, Optional, Sequence

from .cell import CellState, Line
from .hints import EMPTY_LINE_HINT, LineHints


def extract_runs(line: Sequence[CellState]) -> List[int]:
    """
    Get the lengths of maximal runs of FILLED cells, in order.

    Args:
        line: Line contents

    Returns:
        Run lengths (empty list if nothing is filled)
    """
    runs = []
    count = 0
    for cell in line:
        if cell is CellState.FILLED:
            count += 1
        elif count > 0:
            runs.append(count)
            count = 0
    if count > 0:
        runs.append(count)
    return runs


def prefix_feasible(line: Sequence[CellState], hints: LineHints) -> bool:
    """
    Quick compatibility check between a line and its hints.

    Observed filled runs are matched against the hints in order: the
    line fails if there are more runs than hints or a run is longer
    than its hint. It also fails when the unknown cells cannot host
    the hints not yet matched plus one gap between each pair.

    This is a heuristic, not an exact test; see line_feasible.

    Args:
        line: Line contents
        hints: Run lengths for the line

    Returns:
        True if the line looks completable
    """
    runs = extract_runs(line)
    for i, run in enumerate(runs):
        if i >= len(hints) or run > hints[i]:
            return False

    remaining_space = sum(1 for cell in line if cell is CellState.EMPTY)
    remaining_hints = hints[len(runs):]
    needed_space = sum(remaining_hints) + max(0, len(remaining_hints) - 1)
    return remaining_space >= needed_space


def can_place_block(line: Sequence[CellState], start: int, length: int) -> bool:
    """
    Check whether a run can occupy line[start:start + length].

    The run must fit, cover no BLOCKED cell, and must not touch a
    FILLED cell on either side (it would merge into a longer run).

    Args:
        line: Line contents
        start: First covered index
        length: Run length

    Returns:
        True if the placement is admissible
    """
    end = start + length
    if start < 0 or end > len(line):
        return False
    for i in range(start, end):
        if line[i] is CellState.BLOCKED:
            return False
    if start > 0 and line[start - 1] is CellState.FILLED:
        return False
    if end < len(line) and line[end] is CellState.FILLED:
        return False
    return True


def with_cell(line: Line, index: int, value: CellState) -> Line:
    """Copy of the line with one cell replaced."""
    return line[:index] + (value,) + line[index + 1:]


def with_block(line: Line, start: int, length: int) -> Line:
    """Copy of the line with a run of FILLED cells placed at start."""
    return line[:start] + (CellState.FILLED,) * length + line[start + length:]


def feasible_starts(line: Sequence[CellState], hints: LineHints) -> Optional[List[List[int]]]:
    """
    Find, for each hint, every start position used by some full solution.

    A start is kept for hint k only if the hints before k fit to its
    left and the hints after k fit to its right, with every FILLED
    cell of the line covered by some run. Two tables drive this:

        prefix[j][i]: hints[:j] fit exactly inside line[:i]
        suffix[j][i]: hints[j:] fit exactly inside line[i:]

    Args:
        line: Line contents
        hints: Run lengths for the line

    Returns:
        One sorted list of starts per hint, or None if no arrangement
        of the hints is consistent with the line. The empty-line hint
        (0,) yields an empty list when no cell is FILLED.
    """
    n = len(line)
    if tuple(hints) == EMPTY_LINE_HINT:
        if any(cell is CellState.FILLED for cell in line):
            return None
        return []

    k = len(hints)
    not_filled = [cell is not CellState.FILLED for cell in line]

    prefix = [[False] * (n + 1) for _ in range(k + 1)]
    prefix[0][0] = True
    for i in range(1, n + 1):
        prefix[0][i] = prefix[0][i - 1] and not_filled[i - 1]
    for j in range(1, k + 1):
        length = hints[j - 1]
        for i in range(1, n + 1):
            ok = prefix[j][i - 1] and not_filled[i - 1]
            start = i - length
            if not ok and start >= 0 and can_place_block(line[:i], start, length):
                if start == 0:
                    ok = prefix[j - 1][0]
                else:
                    ok = prefix[j - 1][start - 1]
            prefix[j][i] = ok

    suffix = [[False] * (n + 1) for _ in range(k + 1)]
    suffix[k][n] = True
    for i in range(n - 1, -1, -1):
        suffix[k][i] = suffix[k][i + 1] and not_filled[i]
    for j in range(k - 1, -1, -1):
        length = hints[j]
        for i in range(n - 1, -1, -1):
            ok = suffix[j][i + 1] and not_filled[i]
            end = i + length
            if not ok and can_place_block(line, i, length):
                if end == n:
                    ok = suffix[j + 1][n]
                else:
                    ok = suffix[j + 1][end + 1]
            suffix[j][i] = ok

    if not prefix[k][n]:
        return None

    starts: List[List[int]] = []
    for j, length in enumerate(hints):
        positions = []
        for s in range(0, n - length + 1):
            if not can_place_block(line, s, length):
                continue
            left_ok = prefix[j][0] if s == 0 else prefix[j][s - 1]
            end = s + length
            right_ok = suffix[j + 1][n] if end == n else suffix[j + 1][end + 1]
            if left_ok and right_ok:
                positions.append(s)
        starts.append(positions)
    return starts


def line_feasible(line: Sequence[CellState], hints: LineHints) -> bool:
    """
    Exact check: can the line still be completed to match its hints?

    Once this returns False for a line, filling or blocking more of
    its cells can never make it True again.

    Args:
        line: Line contents
        hints: Run lengths for the line

    Returns:
        True if at least one full arrangement fits the known cells
    """
    return feasible_starts(line, hints) is not None


def line_complete(line: Sequence[CellState], hints: LineHints) -> bool:
    """
    Check whether the FILLED runs of a line are exactly its hints.

    EMPTY and BLOCKED cells are treated alike.
    """
    runs = tuple(extract_runs(line))
    return runs == tuple(hints) or (not runs and tuple(hints) == EMPTY_LINE_HINT)

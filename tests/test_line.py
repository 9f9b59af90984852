"""
Tests for single-line checks: runs, placement and feasibility.

Usage:
    pytest tests/test_line.py
"""

import itertools
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nonogram.solver import CellState, encode_line, line_feasible, parse_line, prefix_feasible
from nonogram.solver.line import (
    can_place_block,
    extract_runs,
    feasible_starts,
    line_complete,
)


ALL_STATES = (CellState.EMPTY, CellState.FILLED, CellState.BLOCKED)


def brute_force_feasible(line, hints):
    """Try every full filled/unfilled assignment of the line."""
    for bits in itertools.product((False, True), repeat=len(line)):
        if encode_line(bits) != tuple(hints):
            continue
        consistent = all(
            (cell is CellState.EMPTY)
            or (cell is CellState.FILLED and bit)
            or (cell is CellState.BLOCKED and not bit)
            for cell, bit in zip(line, bits)
        )
        if consistent:
            return True
    return False


def test_extract_runs():
    assert extract_runs(parse_line("##.#x###")) == [2, 1, 3]
    assert extract_runs(parse_line("..x..")) == []


def test_prefix_feasible():
    assert prefix_feasible(parse_line("....."), (3,))
    assert prefix_feasible(parse_line("....."), (2, 2))
    # More observed runs than hints
    assert not prefix_feasible(parse_line("#.#.."), (3,))
    # Run longer than its hint
    assert not prefix_feasible(parse_line("####."), (3,))
    # Not enough unknown cells for the remaining hints plus gaps
    assert not prefix_feasible(parse_line("xxx.."), (3,))
    assert not prefix_feasible(parse_line("...x."), (2, 2))


def test_empty_hint_feasibility():
    assert prefix_feasible(parse_line("..x.."), (0,))
    assert not prefix_feasible(parse_line("..#.."), (0,))
    assert line_feasible(parse_line("..x.."), (0,))
    assert not line_feasible(parse_line("..#.."), (0,))


def test_can_place_block():
    line = parse_line("..x..")
    assert can_place_block(line, 0, 2)
    assert not can_place_block(line, 1, 2)   # covers a blocked cell
    assert not can_place_block(line, 3, 3)   # runs off the end
    touching = parse_line(".#...")
    assert not can_place_block(touching, 2, 2)  # would merge with (0,1)
    assert not can_place_block(parse_line("...#."), 1, 2)
    assert can_place_block(touching, 1, 2)


def test_exact_check_is_stricter_and_looser():
    """The exact check sees arrangements the prefix heuristic misses."""
    split = parse_line("#.#..")
    assert not prefix_feasible(split, (3,))
    assert line_feasible(split, (3,))

    assert not line_feasible(parse_line("#x#.."), (3,))


@pytest.mark.parametrize("hints", [(2, 1), (1, 1, 1), (6,), (3,), (0,), (1, 2)])
def test_exact_check_matches_brute_force(hints):
    for line in itertools.product(ALL_STATES, repeat=6):
        assert line_feasible(line, hints) == brute_force_feasible(line, hints), (line, hints)


def test_feasibility_monotonicity():
    """Once infeasible, forcing further cells never restores feasibility."""
    hints = (2, 1)
    checked = 0
    for line in itertools.product(ALL_STATES, repeat=6):
        if line_feasible(line, hints):
            continue
        for i, cell in enumerate(line):
            if cell is not CellState.EMPTY:
                continue
            for value in (CellState.FILLED, CellState.BLOCKED):
                forced = line[:i] + (value,) + line[i + 1:]
                assert not line_feasible(forced, hints)
                checked += 1
    print(f"\n  Checked {checked} forcings of infeasible lines")
    assert checked > 0


def test_feasible_starts():
    assert feasible_starts(parse_line("....."), (3,)) == [[0, 1, 2]]
    assert feasible_starts(parse_line("....."), (2, 2)) == [[0], [3]]
    assert feasible_starts(parse_line(".#..."), (2,)) == [[0, 1]]
    assert feasible_starts(parse_line("#x#.."), (3,)) is None
    assert feasible_starts(parse_line("....."), (0,)) == []


def test_line_complete():
    assert line_complete(parse_line("##x#."), (2, 1))
    assert not line_complete(parse_line("##x.."), (2, 1))
    assert line_complete(parse_line("x...x"), (0,))


def test_cell_symbols():
    assert parse_line("#x.") == (CellState.FILLED, CellState.BLOCKED, CellState.EMPTY)
    assert [cell.is_known for cell in parse_line("#x.")] == [True, True, False]
    assert CellState.EMPTY.next_in_cycle() is CellState.FILLED
    assert CellState.BLOCKED.next_in_cycle() is CellState.EMPTY
    with pytest.raises(ValueError):
        CellState.from_symbol("?")

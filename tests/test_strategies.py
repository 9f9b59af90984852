"""
Tests for the line analyzers, move selection and the solve loop.

Usage:
    pytest tests/test_strategies.py
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nonogram.solver import (
    CellState,
    GridSize,
    SolveContext,
    SolveMove,
    SolverStrategy,
    UserGrid,
    create_strategy,
    generate_hints,
    generate_puzzle,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
    parse_line,
    register_strategy,
    rng_for_seed,
    select_best_move,
    to_solution_grid,
)


PLUS = to_solution_grid([
    [0, 1, 0],
    [1, 1, 1],
    [0, 1, 0],
])


@pytest.fixture(params=["overlap", "positional"])
def strategy(request):
    return create_strategy(request.param)


@pytest.fixture
def overlap():
    return create_strategy("overlap")


def random_partial_grid(solution, rng, reveal=0.4):
    """Copy some solution cells into an otherwise empty grid."""
    return UserGrid.from_rows([
        [
            (CellState.FILLED if cell else CellState.BLOCKED) if rng.random() < reveal
            else CellState.EMPTY
            for cell in row
        ]
        for row in solution
    ])


# =============================================================================
# Single-line analysis
# =============================================================================

def test_three_of_five_fills_centre(strategy):
    moves = strategy.analyze_line(parse_line("....."), (3,))
    fills = [m for m in moves if m.is_fill]

    print(f"\n  {strategy.name}: fills at {[m.col for m in fills]}")
    centre = [m for m in fills if m.col == 2]
    assert len(centre) == 1
    assert centre[0].confidence == 1.0
    assert all(m.row == 0 for m in moves)


def test_overlap_only_emits_forced_cell(overlap):
    moves = overlap.analyze_line(parse_line("....."), (3,))
    assert [(m.col, m.value) for m in moves] == [(2, CellState.FILLED)]


def test_positional_mask_overreaches():
    """The merged mask marks every cell of a 3-in-5 line as fillable."""
    positional = create_strategy("positional")
    moves = positional.analyze_line(parse_line("....."), (3,))
    assert sorted(m.col for m in moves if m.is_fill) == [0, 1, 2, 3, 4]


def test_empty_hint_blocks_every_cell(strategy):
    moves = strategy.analyze_line(parse_line("....."), (0,))
    assert len(moves) == 5
    assert all(m.value is CellState.BLOCKED for m in moves)
    assert all(m.confidence == 0.8 for m in moves)
    assert all(m.reason == "Empty line" for m in moves)


def test_column_coordinates(overlap):
    moves = overlap.analyze_line(parse_line("....."), (3,), is_row=False, line_index=4)
    assert [m.position for m in moves] == [(2, 4)]


def test_overlap_blocks_unreachable_cells(overlap):
    # (2,) must cover the filled cell at index 1
    moves = overlap.analyze_line(parse_line(".#...."), (2,))
    blocked = sorted(m.col for m in moves if m.value is CellState.BLOCKED)
    filled = sorted(m.col for m in moves if m.is_fill)
    assert blocked == [3, 4, 5]
    assert filled == []


def test_infeasible_line_yields_nothing(overlap):
    assert overlap.analyze_line(parse_line("#x#.."), (3,)) == []


def test_positional_blocks_unreachable_cells():
    positional = create_strategy("positional")
    moves = positional.analyze_line(parse_line("#...."), (1,))
    assert [m.col for m in moves] == [1, 2, 3, 4]
    assert all(m.value is CellState.BLOCKED for m in moves)
    assert all(m.confidence == 0.8 for m in moves)
    assert all(m.reason == "Impossible position" for m in moves)


def test_positional_fill_gate_rejects_split_run():
    """Cell 2 is in the mask, but filling it would leave two runs for one hint."""
    positional = create_strategy("positional")
    moves = positional.analyze_line(parse_line("#...."), (3,))
    assert [m.col for m in moves if m.is_fill] == [1]
    assert [m.col for m in moves if not m.is_fill] == [3, 4]
    assert all(m.col != 2 for m in moves)


def test_positional_block_gate_keeps_room_for_hints():
    """A lone 3-run is matched against the 1 hint, so the mask stays empty
    and blocking any cell leaves too few unknowns for both runs.
    """
    positional = create_strategy("positional")
    assert positional.analyze_line(parse_line("....."), (1, 3)) == []


def test_overlap_block_moves(overlap):
    moves = overlap.analyze_line(parse_line("....."), (1, 3))
    assert [(m.col, m.value) for m in moves] == [
        (0, CellState.FILLED),
        (1, CellState.BLOCKED),
        (2, CellState.FILLED),
        (3, CellState.FILLED),
        (4, CellState.FILLED),
    ]
    block = moves[1]
    assert block.confidence == 0.8
    assert block.reason == "Impossible position"
    assert all(m.confidence == 1.0 and m.reason == "Definite cell" for m in moves if m.is_fill)

    moves = overlap.analyze_line(parse_line("#...."), (1,))
    assert [m.col for m in moves] == [1, 2, 3, 4]
    assert all(m.confidence == 0.8 and m.reason == "Impossible position" for m in moves)


def test_never_touches_known_cells(strategy):
    rng = random.Random(5)
    solution = generate_puzzle(GridSize(7, 7), 0.5, rng_for_seed("regress"))
    hints = generate_hints(solution)
    for _ in range(20):
        grid = random_partial_grid(solution, rng)
        for move in strategy.find_all_moves(grid, hints):
            assert grid.get_cell(move.row, move.col) is CellState.EMPTY


def test_overlap_moves_agree_with_solution(overlap):
    rng = random.Random(11)
    checked = 0
    for i in range(15):
        solution = generate_puzzle(GridSize(6, 8), 0.5, rng_for_seed(f"sound{i}"))
        hints = generate_hints(solution)
        grid = random_partial_grid(solution, rng)
        for move in overlap.find_all_moves(grid, hints):
            assert move.is_fill == solution[move.row][move.col], move
            checked += 1
    print(f"\n  Checked {checked} moves")
    assert checked > 0


# =============================================================================
# Aggregation and selection
# =============================================================================

def test_finished_grid_has_no_moves(strategy):
    hints = generate_hints(PLUS)
    grid = UserGrid.from_solution(PLUS, blocked_empty=True)
    assert strategy.find_best_move(grid, hints) is None


def test_unmarked_empties_only_get_blocks(overlap):
    hints = generate_hints(PLUS)
    grid = UserGrid.from_solution(PLUS, blocked_empty=False)
    moves = overlap.find_all_moves(grid, hints)
    assert moves
    assert not any(m.is_fill for m in moves)
    assert overlap.find_best_move(grid, hints).value is CellState.BLOCKED


def test_fill_beats_block():
    block = SolveMove(0, 0, CellState.BLOCKED, 1.0, "Impossible position")
    fill = SolveMove(1, 1, CellState.FILLED, 1.0, "Definite cell")
    assert select_best_move([block, fill]) is fill

    weak_fill = SolveMove(2, 2, CellState.FILLED, 0.1, "Definite cell")
    assert select_best_move([block, weak_fill]) is weak_fill


def test_selection_ties_keep_discovery_order():
    first = SolveMove(0, 3, CellState.FILLED, 1.0, "Definite cell")
    second = SolveMove(0, 1, CellState.FILLED, 1.0, "Definite cell")
    stronger = SolveMove(4, 4, CellState.BLOCKED, 0.9, "Impossible position")
    weaker = SolveMove(3, 3, CellState.BLOCKED, 0.8, "Impossible position")
    assert select_best_move([first, second]) is first
    assert select_best_move([weaker, stronger]) is stronger
    assert select_best_move([]) is None


def test_rows_are_scanned_before_columns(overlap):
    hints = generate_hints(PLUS)
    moves = overlap.find_all_moves(UserGrid.empty(3, 3), hints)
    # Row 1 and column 1 are both fully forced
    assert [m.position for m in moves] == [(1, 0), (1, 1), (1, 2), (0, 1), (1, 1), (2, 1)]
    assert overlap.find_best_move(UserGrid.empty(3, 3), hints).position == (1, 0)


def test_move_cannot_clear_a_cell():
    with pytest.raises(ValueError):
        SolveMove(0, 0, CellState.EMPTY, 1.0, "Definite cell")


def test_shape_mismatch(overlap):
    hints = generate_hints(PLUS)
    with pytest.raises(ValueError):
        overlap.find_all_moves(UserGrid.empty(3, 4), hints)


# =============================================================================
# Solve loop
# =============================================================================

def test_solve_plus(overlap):
    hints = generate_hints(PLUS)
    result = overlap.solve(SolveContext(grid=UserGrid.empty(3, 3), hints=hints))

    print(f"\n  {result.move_count} moves, {result.metrics.computation_time_ms:.2f}ms")
    assert result.is_solved
    assert not result.was_cancelled
    assert not result.is_stuck
    assert result.move_count == 9
    assert result.final_grid.count(CellState.EMPTY) == 0
    assert result.final_grid.matches_solution(PLUS)
    assert len(result.grids) == result.move_count + 1
    assert result.get_grid_after_move(0) == result.grids[0].apply_move(result.moves[0])
    assert result.metrics.strategy_name == "overlap"


def test_solve_stops_when_solution_reached(overlap):
    hints = generate_hints(PLUS)
    context = SolveContext(grid=UserGrid.empty(3, 3), hints=hints, solution=PLUS)
    result = overlap.solve(context)
    assert result.is_solved
    assert result.move_count == 5
    assert all(m.is_fill for m in result.moves)


def test_solve_full_grid(overlap):
    solution = to_solution_grid([[1] * 4] * 4)
    result = overlap.solve(SolveContext(grid=UserGrid.empty(4, 4), hints=generate_hints(solution)))
    assert result.is_solved
    assert result.move_count == 16


def test_solve_never_fills_outside_solution(overlap):
    for i in range(10):
        solution = generate_puzzle(GridSize(8, 8), 0.55, rng_for_seed(f"loop{i}"))
        result = overlap.solve(SolveContext(grid=UserGrid.empty(8, 8),
                                            hints=generate_hints(solution)))
        for move in result.moves:
            assert move.is_fill == solution[move.row][move.col]


def test_stuck_on_ambiguous_grid(overlap):
    checker = to_solution_grid([
        [1, 0],
        [0, 1],
    ])
    result = overlap.solve(SolveContext(grid=UserGrid.empty(2, 2), hints=generate_hints(checker)))
    assert result.move_count == 0
    assert result.is_stuck


def test_cancelled_before_first_move(overlap):
    context = SolveContext(grid=UserGrid.empty(3, 3), hints=generate_hints(PLUS))
    context.cancel()
    result = overlap.solve(context)
    assert result.was_cancelled
    assert result.move_count == 0
    assert result.final_grid == UserGrid.empty(3, 3)


def test_step_limit(overlap):
    context = SolveContext(grid=UserGrid.empty(3, 3), hints=generate_hints(PLUS), max_steps=2)
    result = overlap.solve(context)
    assert result.move_count == 2
    assert result.was_cancelled


def test_progress_reported(overlap):
    reports = []
    context = SolveContext(
        grid=UserGrid.empty(3, 3),
        hints=generate_hints(PLUS),
        progress_callback=lambda percent, message: reports.append((percent, message)),
    )
    result = overlap.solve(context)
    assert len(reports) == result.move_count
    assert all(0.0 < percent < 1.0 for percent, _ in reports)
    assert reports[-1][1] == "9 moves, 9/9 cells decided"


# =============================================================================
# Registry
# =============================================================================

def test_registry():
    names = get_strategy_names()
    assert "overlap" in names
    assert "positional" in names
    assert get_default_strategy_name() == "overlap"

    info = {entry["name"]: entry for entry in get_strategy_info()}
    assert set(info) >= {"overlap", "positional"}
    assert info["overlap"]["default"]
    assert not info["positional"]["default"]

    assert create_strategy().name == "overlap"
    assert create_strategy("positional").name == "positional"

    with pytest.raises(ValueError, match="Available"):
        create_strategy("does_not_exist")


def test_duplicate_names_rejected():
    class Impostor(SolverStrategy):
        name = "overlap"

        def deduce(self, line, hints):
            return []

    with pytest.raises(ValueError):
        register_strategy(Impostor)
    assert type(create_strategy("overlap")).__name__ == "OverlapStrategy"

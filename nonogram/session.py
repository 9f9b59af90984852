"""
Game Session Module

Holds everything a front end needs about the current game in one
immutable GameState value. Every user action is a pure function that
takes a state and returns the next one; nothing here keeps a global
or mutates its inputs.

Usage:
    state = initial_state()
    state = new_game(state, GridSize(5, 5), Difficulty.MEDIUM, seed="k3x9qa")
    state = toggle_cell(state, 0, 2)               # empty -> filled
    move = next_move(state, create_strategy("overlap"))
    if move:
        state = apply_move(state, move)
"""

import logging
import random
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from nonogram.rasterizer import RasterOptions, image_to_grid
from nonogram.seeds import SeedDecodeError, decode_image_seed, encode_image_seed, is_image_seed
from nonogram.solver import (
    CellState,
    Difficulty,
    GridSize,
    Hints,
    SolutionGrid,
    SolveMove,
    SolverStrategy,
    UserGrid,
    generate_hints,
    generate_puzzle,
    new_seed,
    rng_for_seed,
)

logger = logging.getLogger(__name__)


DEFAULT_SIZE = GridSize(5, 5)


@dataclass(frozen=True)
class Puzzle:
    """
    A puzzle's fixed data, created once per game.

    Attributes:
        solution: Binary solution grid
        hints: Hints derived from the solution
    """
    solution: SolutionGrid
    hints: Hints

    @classmethod
    def from_solution(cls, solution: SolutionGrid) -> "Puzzle":
        return cls(solution=solution, hints=generate_hints(solution))


@dataclass(frozen=True)
class GameState:
    """
    Complete session state.

    Attributes:
        puzzle: Current puzzle, or None before the first game
        grid: Player's grid, or None before the first game
        difficulty: Difficulty of the current puzzle
        size: Grid size of the current puzzle
        seed: Seed that reproduces the current puzzle
        show_solution: True while the solution is revealed
        is_victory: True once the grid has matched the solution
        start_time: Time of the first cell edit, if any
        end_time: Time the game was won (or given up)
    """
    puzzle: Optional[Puzzle] = None
    grid: Optional[UserGrid] = None
    difficulty: Difficulty = Difficulty.MEDIUM
    size: GridSize = DEFAULT_SIZE
    seed: str = ""
    show_solution: bool = False
    is_victory: bool = False
    start_time: Optional[float] = None
    end_time: Optional[float] = None

    @property
    def has_game(self) -> bool:
        return self.puzzle is not None and self.grid is not None

    @property
    def elapsed_seconds(self) -> Optional[float]:
        """Time from first edit to victory, if both happened."""
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time


def initial_state(size: GridSize = DEFAULT_SIZE,
                  difficulty: Difficulty = Difficulty.MEDIUM) -> GameState:
    """State before any game has been generated."""
    return GameState(size=size, difficulty=difficulty)


def _start_game(state: GameState, solution: SolutionGrid, difficulty: Difficulty,
                seed: str) -> GameState:
    puzzle = Puzzle.from_solution(solution)
    size = GridSize(rows=len(solution), columns=len(solution[0]))
    return replace(
        state,
        puzzle=puzzle,
        grid=UserGrid.empty(size.rows, size.columns),
        difficulty=difficulty,
        size=size,
        seed=seed,
        show_solution=False,
        is_victory=False,
        start_time=None,
        end_time=None,
    )


def new_game(state: GameState, size: GridSize, difficulty: Difficulty,
             seed: Optional[str] = None, rng: Optional[random.Random] = None) -> GameState:
    """
    Start a new game, resetting grid, timers and flags.

    An "img_" seed rebuilds its image puzzle (size and difficulty come
    from the seed). If it cannot be decoded, a fresh random puzzle is
    generated instead so the session always ends up playable.

    Args:
        state: Current state
        size: Grid size for generated puzzles
        difficulty: Difficulty tier for generated puzzles
        seed: Optional seed; a random one is made when omitted
        rng: Optional randomness used only to make new seeds

    Returns:
        New state with a fresh puzzle
    """
    if seed and is_image_seed(seed):
        try:
            decoded = decode_image_seed(seed)
        except SeedDecodeError as e:
            logger.warning(f"Failed to generate game from seed: {e}; using a random puzzle")
            seed = new_seed(rng)
        else:
            logger.info(f"New image game {decoded.rows}x{decoded.columns}")
            return _start_game(state, decoded.grid, Difficulty.CUSTOM, seed)

    # Random puzzles need a sampling probability
    if difficulty is Difficulty.CUSTOM:
        difficulty = Difficulty.MEDIUM

    seed = seed or new_seed(rng)
    solution = generate_puzzle(size, difficulty.fill_probability, rng_for_seed(seed))
    logger.info(f"New game {size.rows}x{size.columns} ({difficulty.value}), seed={seed}")
    return _start_game(state, solution, difficulty, seed)


def new_game_from_image(state: GameState, source: Union[str, Path, Image.Image],
                        options: RasterOptions = RasterOptions()) -> GameState:
    """
    Start a game from an image.

    Args:
        state: Current state
        source: Image path or PIL Image
        options: Rasterization threshold and maximum size

    Returns:
        New state whose seed reproduces the image puzzle

    Raises:
        RasterizeError: If the image cannot be loaded
    """
    grid = image_to_grid(source, options)
    seed = encode_image_seed(grid, options.threshold)
    logger.info(f"New image game {len(grid)}x{len(grid[0])}, threshold={options.threshold}")
    return _start_game(state, grid, Difficulty.CUSTOM, seed)


def _require_game(state: GameState) -> None:
    if not state.has_game:
        raise RuntimeError("No game in progress")


def _now(now: Optional[float]) -> float:
    return time.time() if now is None else now


def toggle_cell(state: GameState, row: int, col: int,
                next_value: Optional[CellState] = None,
                now: Optional[float] = None) -> GameState:
    """
    Change one cell of the player's grid.

    Without next_value the cell cycles empty -> filled -> blocked ->
    empty. The first edit starts the timer, and the grid is checked
    for victory afterwards.

    Args:
        state: Current state
        row: Row index
        col: Column index
        next_value: Explicit value to set
        now: Timestamp (defaults to time.time())

    Returns:
        Updated state

    Raises:
        RuntimeError: If no game is in progress
        ValueError: If the cell is outside the grid
    """
    _require_game(state)
    grid = state.grid
    if not (0 <= row < grid.rows and 0 <= col < grid.cols):
        raise ValueError(f"Cell ({row}, {col}) outside {grid.rows}x{grid.cols} grid")

    timestamp = _now(now)
    current = grid.get_cell(row, col)
    value = next_value if next_value is not None else current.next_in_cycle()
    logger.debug(f"Cell ({row}, {col}): {current.value} -> {value.value}")

    updated = replace(
        state,
        grid=grid.set_cell(row, col, value),
        start_time=state.start_time if state.start_time is not None else timestamp,
    )
    return check_solution(updated, now=timestamp)


def apply_move(state: GameState, move: SolveMove, now: Optional[float] = None) -> GameState:
    """Apply a solver move as an explicit cell edit."""
    return toggle_cell(state, move.row, move.col, move.value, now=now)


def check_solution(state: GameState, now: Optional[float] = None) -> GameState:
    """
    Mark the game won when the filled cells match the solution.

    Blocked and empty cells count the same. Victory is recorded once.
    """
    if not state.has_game or state.is_victory:
        return state
    if state.grid.matches_solution(state.puzzle.solution):
        logger.info("Puzzle solved")
        return replace(state, is_victory=True, end_time=_now(now))
    return state


def toggle_show_solution(state: GameState, now: Optional[float] = None) -> GameState:
    """
    Reveal (or stop revealing) the solution.

    Revealing copies the solution into the grid and counts as the end
    of the game.
    """
    _require_game(state)
    show = not state.show_solution
    if not show:
        return replace(state, show_solution=False)
    return replace(
        state,
        show_solution=True,
        is_victory=True,
        end_time=state.end_time if state.end_time is not None else _now(now),
        grid=UserGrid.from_solution(state.puzzle.solution, blocked_empty=False),
    )


def can_auto_solve(state: GameState) -> bool:
    """Auto-solve needs a game that is neither won nor revealed."""
    return state.has_game and not state.is_victory and not state.show_solution


def next_move(state: GameState, strategy: SolverStrategy) -> Optional[SolveMove]:
    """
    Ask a strategy for the next deduction on the current grid.

    Returns:
        Best move, or None when line deduction is stuck
    """
    _require_game(state)
    return strategy.find_best_move(state.grid, state.puzzle.hints)

"""
Solver Package - Puzzle generation, hints and line-deduction solving.

Provides the seeded generator, the hint encoder and a pluggable
line-analysis framework. Strategies can be selected by name at runtime.

Public API:
    - CellState: Tri-state user cell (EMPTY / FILLED / BLOCKED)
    - UserGrid: Immutable tri-state grid
    - Hints: Row/column run-length clues
    - SolveMove: One deduced cell assignment
    - SolveResult / SolveMetrics: Output of a full step loop
    - SolveContext: Grid, hints and cancellation for a step loop
    - SolverStrategy: Abstract base for line analyzers
    - generate_puzzle(), generate_hints(), select_best_move()
    - create_strategy(): Factory function

Usage:
    from nonogram.solver import (
        GridSize, Difficulty, UserGrid, create_strategy,
        generate_hints, generate_puzzle, rng_for_seed,
    )

    solution = generate_puzzle(GridSize(5, 5), Difficulty.MEDIUM.fill_probability,
                               rng_for_seed("abc123"))
    hints = generate_hints(solution)
    grid = UserGrid.empty(5, 5)

    strategy = create_strategy("overlap")
    move = strategy.find_best_move(grid, hints)
    while move is not None:
        grid = grid.apply_move(move)
        move = strategy.find_best_move(grid, hints)
"""

# Core data structures
from .cell import CellState, parse_line
from .board import SolutionGrid, UserGrid, to_solution_grid
from .hints import EMPTY_LINE_HINT, Hints, encode_line, generate_hints
from .move import SolveMove, select_best_move
from .solution import SolveMetrics, SolveResult
from .context import SolveContext

# Generation
from .generator import (
    Difficulty,
    GridSize,
    generate_puzzle,
    new_seed,
    rng_for_seed,
    validate_puzzle,
)

# Line checks
from .line import line_feasible, prefix_feasible

# Strategy framework
from .base import SolverStrategy, all_lines_complete
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "CellState",
    "parse_line",
    "SolutionGrid",
    "UserGrid",
    "to_solution_grid",
    "EMPTY_LINE_HINT",
    "Hints",
    "encode_line",
    "generate_hints",
    "SolveMove",
    "select_best_move",
    "SolveMetrics",
    "SolveResult",
    "SolveContext",
    # Generation
    "Difficulty",
    "GridSize",
    "generate_puzzle",
    "new_seed",
    "rng_for_seed",
    "validate_puzzle",
    # Line checks
    "line_feasible",
    "prefix_feasible",
    # Strategy framework
    "SolverStrategy",
    "all_lines_complete",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
]

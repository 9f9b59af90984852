"""
Generator Module - Seeded sampling of puzzle solution grids.

Generation is a pure function of (seed, size, fill probability): the
random stream is always passed in, never taken from module state.
"""

import random
import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import SolutionGrid


SEED_ALPHABET = string.digits + string.ascii_lowercase
SEED_LENGTH = 6


class Difficulty(Enum):
    """Difficulty tiers. Denser grids are easier to deduce."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    CUSTOM = "custom"  # Image-derived puzzles

    @property
    def fill_probability(self) -> float:
        """
        Probability that any one cell is filled.

        Raises:
            ValueError: For CUSTOM, which has no sampling probability
        """
        if self is Difficulty.CUSTOM:
            raise ValueError("Custom puzzles have no fill probability")
        return _FILL_PROBABILITY[self]


_FILL_PROBABILITY = {
    Difficulty.EASY: 0.7,
    Difficulty.MEDIUM: 0.5,
    Difficulty.HARD: 0.3,
}


@dataclass(frozen=True)
class GridSize:
    """Puzzle dimensions."""
    rows: int
    columns: int

    def __post_init__(self):
        if self.rows <= 0 or self.columns <= 0:
            raise ValueError(f"Grid size must be positive, got {self.rows}x{self.columns}")


def rng_for_seed(seed: str) -> random.Random:
    """
    Create the pseudo-random stream selected by a seed string.

    Args:
        seed: Opaque seed string

    Returns:
        Independent random.Random instance
    """
    return random.Random(seed)


def new_seed(rng: Optional[random.Random] = None) -> str:
    """
    Make a fresh short base-36 seed.

    Args:
        rng: Optional source of randomness (defaults to a new unseeded one)

    Returns:
        Seed string
    """
    source = rng or random.Random()
    return "".join(source.choice(SEED_ALPHABET) for _ in range(SEED_LENGTH))


def generate_puzzle(size: GridSize, fill_probability: float, rng: random.Random) -> SolutionGrid:
    """
    Sample a solution grid cell by cell in row-major order.

    Each cell is filled independently with the given probability.
    No attempt is made to avoid empty lines or isolated cells.

    Args:
        size: Grid dimensions
        fill_probability: Chance of a cell being filled, 0.0-1.0
        rng: Random stream, consumed one value per cell

    Returns:
        Immutable solution grid
    """
    if not 0.0 <= fill_probability <= 1.0:
        raise ValueError(f"Fill probability must be within [0, 1], got {fill_probability}")

    return tuple(
        tuple(rng.random() < fill_probability for _ in range(size.columns))
        for _ in range(size.rows)
    )


def validate_puzzle(solution: SolutionGrid) -> bool:
    """
    Check that a solution makes a pleasant puzzle.

    A puzzle passes when every row and column has at least one
    filled cell and every filled cell touches another filled cell
    horizontally or vertically. Not applied by generate_puzzle.

    Args:
        solution: Binary solution grid

    Returns:
        True if the grid passes both checks
    """
    rows = len(solution)
    cols = len(solution[0]) if rows else 0
    if rows == 0 or cols == 0:
        return False

    if any(not any(row) for row in solution):
        return False
    if any(not any(solution[r][c] for r in range(rows)) for c in range(cols)):
        return False

    for r in range(rows):
        for c in range(cols):
            if not solution[r][c]:
                continue
            has_neighbour = (
                (r > 0 and solution[r - 1][c])
                or (r < rows - 1 and solution[r + 1][c])
                or (c > 0 and solution[r][c - 1])
                or (c < cols - 1 and solution[r][c + 1])
            )
            if not has_neighbour:
                return False
    return True

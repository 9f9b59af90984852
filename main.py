"""
Nonogram - Entry Point

Generates a puzzle (from a seed, an img_ seed or an image), prints its
hints and grid, and optionally auto-solves it step by step.

Example:
    python main.py
    python main.py --seed k3x9qa --rows 10 --cols 10 --difficulty hard --solve
    python main.py --image picture.png --threshold 100 --solve --speed 10
"""

import sys
import logging
import argparse
from typing import Optional

from PyQt5.QtCore import QCoreApplication

from nonogram.rasterizer import RasterOptions, RasterizeError
from nonogram.session import (
    GameState,
    initial_state,
    new_game,
    new_game_from_image,
)
from nonogram.settings import load_settings, save_settings
from nonogram.solve_worker import AutoSolveWorker
from nonogram.solver import Difficulty, GridSize, SolveMove, get_strategy_info, get_strategy_names


logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Log to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("nonogram.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def format_hints(hints) -> str:
    return " ".join(str(h) for h in hints)


def render_state(state: GameState) -> str:
    """
    Render hints and grid as plain text.

    Row hints are printed to the right of each row, column hints
    below the grid, one column per line.
    """
    grid = state.grid
    hints = state.puzzle.hints
    lines = []
    for r in range(grid.rows):
        row_text = " ".join(cell.symbol for cell in grid.row(r))
        lines.append(f"{row_text}   | {format_hints(hints.rows[r])}")
    lines.append("")
    for c in range(grid.cols):
        lines.append(f"col {c:2d}: {format_hints(hints.columns[c])}")
    return "\n".join(lines)


class Application:
    """
    Main application controller.

    Builds the game from CLI arguments and saved settings, and runs
    the auto-solve worker when requested.
    """

    def __init__(self, args: argparse.Namespace):
        """
        Initialize the application.

        Args:
            args: Parsed command line arguments
        """
        self.args = args
        self.settings = load_settings()
        self.state: GameState = initial_state()
        self.worker: Optional[AutoSolveWorker] = None
        self.qt_app: Optional[QCoreApplication] = None

    def setup(self) -> bool:
        """Create the game. Returns False if it could not be created."""
        args = self.args
        try:
            size = GridSize(
                rows=args.rows if args.rows is not None else self.settings["rows"],
                columns=args.cols if args.cols is not None else self.settings["columns"],
            )
            difficulty = Difficulty(args.difficulty or self.settings["difficulty"])
            options = RasterOptions(
                threshold=args.threshold if args.threshold is not None else self.settings["threshold"],
                max_size=GridSize(self.settings["max_rows"], self.settings["max_columns"]),
            )
        except ValueError as e:
            logger.error(f"Invalid option: {e}")
            return False

        if args.image:
            try:
                self.state = new_game_from_image(self.state, args.image, options)
            except RasterizeError as e:
                logger.error(f"Failed to process image: {e}")
                return False
        else:
            self.state = new_game(self.state, size, difficulty, seed=args.seed)

        if difficulty is not Difficulty.CUSTOM and not args.image:
            self.settings.update({"rows": size.rows, "columns": size.columns,
                                  "difficulty": difficulty.value})
        if args.strategy:
            self.settings["strategy_name"] = args.strategy
        if args.speed is not None:
            self.settings["solve_speed"] = args.speed
        save_settings(self.settings)

        print(f"Seed: {self.state.seed}")
        print(render_state(self.state))
        return True

    def run(self) -> int:
        """
        Run the auto-solver if requested.

        Returns:
            Exit code
        """
        if not self.args.solve:
            return 0

        self.qt_app = QCoreApplication.instance() or QCoreApplication(sys.argv)
        self.worker = AutoSolveWorker(
            self.state,
            speed=self.settings["solve_speed"],
            strategy_name=self.settings["strategy_name"],
        )
        self.worker.move_applied.connect(self._on_move)
        self.worker.error_occurred.connect(self._on_error)
        self.worker.finished.connect(self.qt_app.quit)
        self.worker.start()
        self.qt_app.exec_()

        self.state = self.worker.state
        print()
        print(render_state(self.state))
        print(f"Auto-solve {self.worker.finish_reason} after {self.worker.moves_applied} moves")
        return 0

    def _on_move(self, move: SolveMove):
        print(f"  ({move.row}, {move.col}) -> {move.value.value:7s} {move.reason}")

    def _on_error(self, error_msg: str):
        """Handle worker error."""
        logger.error(f"Worker error: {error_msg}")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Nonogram - Seeded puzzle generator with step-by-step line solver"
    )
    parser.add_argument("--rows", "-r", type=int, help="Grid rows (default from settings)")
    parser.add_argument("--cols", "-c", type=int, help="Grid columns (default from settings)")
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty if d is not Difficulty.CUSTOM],
        help="Difficulty tier (default from settings)"
    )
    parser.add_argument("--seed", "-s", help="Puzzle seed, plain or img_...")
    parser.add_argument("--image", "-i", help="Build the puzzle from an image file")
    parser.add_argument("--threshold", "-t", type=int, help="Brightness threshold 0-255 for --image")
    parser.add_argument("--solve", action="store_true", help="Auto-solve step by step")
    parser.add_argument("--speed", type=int, help="Auto-solve speed 1-10")
    strategies = "; ".join(
        f"{info['name']}{' (default)' if info['default'] else ''}: {info['description']}"
        for info in get_strategy_info()
    )
    parser.add_argument("--strategy", choices=get_strategy_names(),
                        help=f"Line analysis strategy ({strategies})")
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def main():
    """Initialize and run the application."""
    args = parse_args()
    configure_logging(args.debug)

    application = Application(args)
    if not application.setup():
        sys.exit(1)
    sys.exit(application.run())


if __name__ == "__main__":
    main()

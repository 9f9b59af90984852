"""
Auto-Solve Worker Module

Provides a background QThread worker that plays solver moves one at a
time with a visible delay between them. Communicates with the caller
via Qt signals for thread-safe updates.
"""

import logging
import time
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from nonogram.session import GameState, apply_move, can_auto_solve, next_move
from nonogram.solver import SolverStrategy, create_strategy


# Configure module logger
logger = logging.getLogger(__name__)


FINISH_SOLVED = "solved"
FINISH_STUCK = "stuck"
FINISH_CANCELLED = "cancelled"

MIN_SPEED = 1
MAX_SPEED = 10
DEFAULT_SPEED = 3
BASE_DELAY_MS = 1000


def step_delay_ms(speed: int) -> int:
    """
    Delay between moves for a speed setting.

    Args:
        speed: 1 (slowest) to 10 (fastest); clamped to that range

    Returns:
        Milliseconds to wait before applying each move
    """
    speed = max(MIN_SPEED, min(MAX_SPEED, speed))
    return int(BASE_DELAY_MS / (speed * 2))


class AutoSolveWorker(QThread):
    """
    Background worker that auto-solves the current game.

    Each step:
    1. Asks the strategy for the best move
    2. Sleeps for the step delay
    3. Re-checks that solving was not stopped
    4. Applies the move and publishes the new state

    Stops when no move is left (finishing "solved" if the game is won,
    "stuck" otherwise) or when request_stop() is called.

    Signals:
        state_changed(object): Emitted with the GameState after each move
        move_applied(object): Emitted with each SolveMove as it is applied
        finished_solving(str): Emitted once with "solved", "stuck" or "cancelled"
        error_occurred(str): Emitted when a step raises

    Example:
        worker = AutoSolveWorker(state, speed=5)
        worker.state_changed.connect(ui.show_state)
        worker.start()
        # ...
        worker.request_stop()
        worker.wait()
    """

    state_changed = pyqtSignal(object)
    move_applied = pyqtSignal(object)
    finished_solving = pyqtSignal(str)
    error_occurred = pyqtSignal(str)

    def __init__(self, state: GameState, speed: int = DEFAULT_SPEED,
                 strategy_name: Optional[str] = None, delay_ms: Optional[int] = None):
        """
        Initialize the worker.

        Args:
            state: Game to solve
            speed: Solve speed 1-10, used when delay_ms is not given
            strategy_name: Strategy to use (default strategy if None)
            delay_ms: Explicit delay between moves, overrides speed
        """
        super().__init__()
        self._state = state
        self._strategy: SolverStrategy = create_strategy(strategy_name)
        self._delay_ms = step_delay_ms(speed) if delay_ms is None else max(0, delay_ms)
        self._running = False
        self._moves_applied = 0
        self.finish_reason: Optional[str] = None

    @property
    def state(self) -> GameState:
        """Latest game state produced by the worker."""
        return self._state

    @property
    def moves_applied(self) -> int:
        return self._moves_applied

    def set_speed(self, speed: int) -> None:
        """Change the delay used for the following steps."""
        self._delay_ms = step_delay_ms(speed)
        logger.info(f"Solve speed set to {speed} ({self._delay_ms}ms per move)")

    def run(self):
        """
        Main worker loop. Called when thread starts.

        Plays moves until line deduction has nothing left or a stop is
        requested. Moves keep coming after victory to settle blocked cells.
        """
        if not can_auto_solve(self._state):
            logger.warning("Auto-solve not available for this game state")
            self._finish(FINISH_CANCELLED)
            return

        self._running = True
        logger.info(f"Auto-solve started with {self._strategy.name}, {self._delay_ms}ms per move")
        start = time.perf_counter()

        while self._running:
            try:
                move = next_move(self._state, self._strategy)
            except Exception as e:
                logger.exception("Error in auto-solve step")
                self.error_occurred.emit(str(e))
                self._finish(FINISH_CANCELLED)
                return

            if move is None:
                self._finish(FINISH_SOLVED if self._state.is_victory else FINISH_STUCK)
                break

            if self._delay_ms > 0:
                self.msleep(self._delay_ms)

            # Stop may have been requested while sleeping
            if not self._running:
                break

            self._state = apply_move(self._state, move)
            self._moves_applied += 1
            logger.debug(f"Move {self._moves_applied}: ({move.row},{move.col}) -> "
                         f"{move.value.value} [{move.reason}, {move.confidence:.1f}]")
            self.move_applied.emit(move)
            self.state_changed.emit(self._state)

        if self.finish_reason is None:
            self._finish(FINISH_CANCELLED)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Auto-solve {self.finish_reason}: {self._moves_applied} moves in {elapsed_ms:.0f}ms")

    def request_stop(self):
        """
        Request the worker to stop gracefully.

        The move being waited on is not applied. Use wait() after
        calling this to block until stopped.
        """
        logger.info("Stop requested")
        self._running = False

    def is_running(self) -> bool:
        """
        Check if the worker loop is active.

        Returns:
            True if worker loop is active, False otherwise
        """
        return self._running

    def _finish(self, reason: str) -> None:
        self._running = False
        self.finish_reason = reason
        self.finished_solving.emit(reason)

"""
Solve Context Module - Shared context for a solve run.
"""

import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from .board import SolutionGrid, UserGrid
from .hints import Hints


@dataclass
class SolveContext:
    """
    Everything a strategy needs to run the step loop.

    Attributes:
        grid: User grid to start from
        hints: Row and column hints
        solution: Optional solution, used only to report is_solved early
        cancel_flag: Threading event for cancellation
        max_steps: Optional cap on applied moves
        progress_callback: Optional callback for progress updates
    """
    grid: UserGrid
    hints: Hints
    solution: Optional[SolutionGrid] = None
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    max_steps: Optional[int] = None
    progress_callback: Optional[Callable[[float, str], None]] = None

    def is_cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self.cancel_flag.is_set()

    def cancel(self) -> None:
        """Request the loop to stop at the next step boundary."""
        self.cancel_flag.set()

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)

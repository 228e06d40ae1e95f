"""
Convergence polling - repeat a read-only status check until it holds or the
tick budget runs out
"""
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable
from .logger import get_logger
logger = get_logger(__name__)


class PollState(Enum):
    """Terminal states of a poll"""
    CONVERGED = "converged"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PollResult:
    """Outcome of a poll and the tick it ended on"""
    state: PollState
    ticks: int

    def __bool__(self):
        """Allow truthiness check: True when the condition was observed."""
        return self.state is PollState.CONVERGED

    @property
    def converged(self) -> bool:
        return self.state is PollState.CONVERGED


class ConvergencePoller:
    """Fixed-interval poller with a fixed tick budget, no backoff"""

    def __init__(self, interval: float = 1.0, max_ticks: int = 10, sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            interval: Seconds between ticks
            max_ticks: Number of predicate checks before giving up
            sleep: Sleep function, replaced by tests
        """
        if max_ticks < 1:
            raise ValueError("max_ticks must be at least 1")
        self.interval = interval
        self.max_ticks = max_ticks
        self._sleep = sleep
        self._cancelled = False

    def cancel(self):
        """Stop the running or next poll at its next tick."""
        self._cancelled = True

    def poll(self, predicate: Callable[[], bool], description: str = "condition") -> PollResult:
        """
        Check predicate once per tick until it returns True
        Args:
            predicate: Read-only check, True once the target state is reached
            description: What is being waited for, used in log messages
        Returns:
            PollResult, CONVERGED with the tick number or TIMED_OUT after max_ticks
        """
        for tick in range(1, self.max_ticks + 1):
            if self._cancelled:
                self._cancelled = False
                logger.warning("Polling for %s cancelled at tick %d", description, tick)
                return PollResult(PollState.CANCELLED, tick - 1)
            if predicate():
                logger.debug("   %s after %d tick(s)", description, tick)
                return PollResult(PollState.CONVERGED, tick)
            logger.debug("   waiting for %s... (%d/%d)", description, tick, self.max_ticks)
            if tick < self.max_ticks:
                self._sleep(self.interval)
        return PollResult(PollState.TIMED_OUT, self.max_ticks)

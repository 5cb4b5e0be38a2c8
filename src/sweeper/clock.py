"""
Elapsed-time timers for game sessions.

A session notifies its timer when play starts and ends; the timer is
responsible for calling ``session.tick()`` once per second. Nothing here
spawns threads, so ticks always arrive on the caller's thread.
"""
import time
from typing import Callable, Optional


# ============================================================================
# Base Timer
# ============================================================================

class Timer:
    """
    Timer that only tracks whether it is running.

    Suitable when the caller drives ``tick()`` itself, e.g. tests or an
    event loop with its own 1 Hz callback.
    """

    def __init__(self) -> None:
        self.running = False

    def start(self) -> None:
        """Called when the first reveal starts the game."""
        self.running = True

    def stop(self) -> None:
        """Called on win, loss, reset, or when the counter saturates."""
        self.running = False


# ============================================================================
# Monotonic Timer
# ============================================================================

class MonotonicTimer(Timer):
    """
    Timer backed by a monotonic clock.

    Ticks are owed for every whole second since start; ``pump`` delivers
    them to the session. Call it before handling each gesture.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize the timer.

        Args:
            clock: Source of monotonic seconds.
        """
        super().__init__()
        self._clock = clock
        self._started_at: Optional[float] = None
        self._delivered = 0

    def start(self) -> None:
        super().start()
        self._started_at = self._clock()
        self._delivered = 0

    def stop(self) -> None:
        super().stop()
        self._started_at = None

    def due_ticks(self) -> int:
        """Number of ticks owed but not yet delivered."""
        if not self.running or self._started_at is None:
            return 0
        elapsed = int(self._clock() - self._started_at)
        return max(elapsed - self._delivered, 0)

    def pump(self, session) -> int:
        """
        Deliver owed ticks to a session.

        Returns:
            Number of ticks delivered.
        """
        delivered = 0
        for _ in range(self.due_ticks()):
            # The session may stop us mid-way (saturation).
            if not self.running:
                break
            session.tick()
            self._delivered += 1
            delivered += 1
        return delivered

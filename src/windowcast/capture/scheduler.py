"""
Tick Scheduler
==============

Fixed-rate pacing for the capture loop.

Each tick sleeps only the remainder of the period after the work is
done. A tick that already ran past its period is counted as an overrun
and the next tick starts immediately, so a slow encoder shows up in the
stats instead of silently lowering the frame rate.
"""

import threading
import time
from typing import Callable


class TickScheduler:
    """
    Remainder-of-period sleeper driven by a stop event.

    Attributes:
        interval: Target period in seconds
        ticks: Number of completed ticks
        overruns: Ticks whose work took longer than the period
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")

        self.interval = interval
        self._clock = clock
        self.ticks: int = 0
        self.overruns: int = 0

    def now(self) -> float:
        return self._clock()

    def remaining(self, tick_started: float) -> float:
        """Seconds left in the period that began at ``tick_started``."""
        return self.interval - (self._clock() - tick_started)

    def wait_next(self, tick_started: float, stop_event: threading.Event) -> bool:
        """
        Sleep until the next tick is due.

        Args:
            tick_started: Clock value at the start of the finished tick
            stop_event: Shutdown token; wakes the sleep early when set

        Returns:
            True if the loop should run another tick, False on shutdown.
        """
        self.ticks += 1
        remaining = self.remaining(tick_started)

        if remaining <= 0:
            self.overruns += 1
            return not stop_event.is_set()

        return not stop_event.wait(remaining)

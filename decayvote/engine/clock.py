"""Time sources for the consensus engine.

Every component reads "now" through a clock so tests and simulations can age
votes without sleeping. A clock is any zero-argument callable returning
seconds as a float.
"""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], float]


def system_clock() -> float:
    """Wall-clock seconds since the epoch."""
    return time.time()


class ManualClock:
    """Clock that only moves when told to.

    Example:
        clock = ManualClock(start=1000.0)
        clock.advance(2.5)
        clock()  # 1002.5

    ``set`` accepts any value, including one earlier than the current
    reading, to reproduce a system clock stepping backwards.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        """Move forward by ``seconds`` and return the new reading."""
        if seconds < 0:
            raise ValueError(f"advance() needs a non-negative step, got {seconds}")
        self._now += float(seconds)
        return self._now

    def set(self, now: float) -> None:
        self._now = float(now)


__all__ = ["Clock", "system_clock", "ManualClock"]

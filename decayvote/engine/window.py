"""Voting window: the span during which votes are accepted."""

from __future__ import annotations

from typing import Optional

from .clock import Clock, system_clock
from .types import require_finite, require_positive


class Window:
    """Fixed-length window opened at ``start``.

    Elapsed time is recomputed from the clock on every query. A clock reading
    earlier than ``start`` counts as zero elapsed time.
    """

    def __init__(
        self,
        duration: float,
        start: Optional[float] = None,
        clock: Clock = system_clock,
    ) -> None:
        """Initialize the window.

        Args:
            duration: Window length in seconds (must be > 0)
            start: Opening timestamp; defaults to the clock's current reading
            clock: Time source

        Raises:
            ConfigurationError: If duration is not a finite positive number,
                or an explicit start is not finite
        """
        self._duration = require_positive(duration, "window duration")
        self._clock = clock
        self._start = float(clock()) if start is None else require_finite(start, "window start")

    @property
    def start(self) -> float:
        return self._start

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def clock(self) -> Clock:
        return self._clock

    def elapsed(self, now: Optional[float] = None) -> float:
        """Seconds since the window opened, never negative."""
        if now is None:
            now = self._clock()
        return max(0.0, now - self._start)

    def is_open(self, now: Optional[float] = None) -> bool:
        return self.elapsed(now) < self._duration

    def remaining(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds left before the window closes, None once past the duration."""
        left = self._duration - self.elapsed(now)
        if left < 0:
            return None
        return left

    def __repr__(self) -> str:
        return f"Window(start={self._start!r}, duration={self._duration!r})"


__all__ = ["Window"]

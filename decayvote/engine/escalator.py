"""Threshold escalators.

An escalator maps elapsed window time to the share of total decayed weight a
value needs to win. Raising the bar over time makes late swings harder;
lowering it lets a window settle on a plurality once it has run long enough.
Every escalator result is clamped to [floor, cap].
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .types import ConfigurationError, require_finite, require_positive


class Escalator(ABC):
    """Abstract base class for threshold escalators."""

    #: Selector used by the CLI and configuration
    name: str = ""

    def __init__(self, cap: float = 1.0, floor: float = 0.0) -> None:
        self.cap = require_finite(cap, "cap")
        self.floor = require_finite(floor, "floor")
        if self.floor < 0:
            raise ConfigurationError(f"floor must be >= 0, got {self.floor}")
        if self.floor > self.cap:
            raise ConfigurationError(f"floor {self.floor} > cap {self.cap}")

    @abstractmethod
    def raw_threshold(self, elapsed: float) -> float:
        """Unclamped threshold after ``elapsed`` seconds."""
        pass

    def threshold(self, elapsed: float) -> float:
        """Required winning share after ``elapsed`` seconds, within [floor, cap]."""
        elapsed = max(0.0, float(elapsed))
        return max(self.floor, min(self.cap, self.raw_threshold(elapsed)))


class LinearEscalator(Escalator):
    """threshold = min(cap, base + slope * elapsed), floored at ``floor``.

    Non-decreasing when slope >= 0. A negative slope relaxes the threshold
    until it reaches the floor.
    """

    name = "linear"

    def __init__(
        self,
        base: float,
        slope: float = 0.0,
        cap: float = 1.0,
        floor: float = 0.0,
    ) -> None:
        super().__init__(cap=cap, floor=floor)
        self.base = require_finite(base, "base")
        self.slope = require_finite(slope, "slope")

    def raw_threshold(self, elapsed: float) -> float:
        return self.base + self.slope * elapsed

    def __repr__(self) -> str:
        return (
            f"LinearEscalator(base={self.base!r}, slope={self.slope!r}, "
            f"cap={self.cap!r}, floor={self.floor!r})"
        )


class StepEscalator(Escalator):
    """Raises the threshold by ``increment`` every ``interval`` seconds.

    threshold = base + increment * floor(elapsed / interval), clamped to
    [floor, cap].
    """

    name = "step"

    def __init__(
        self,
        base: float,
        increment: float,
        interval: float,
        cap: float = 1.0,
        floor: float = 0.0,
    ) -> None:
        super().__init__(cap=cap, floor=floor)
        self.base = require_finite(base, "base")
        self.increment = require_finite(increment, "increment")
        self.interval = require_positive(interval, "interval")

    def raw_threshold(self, elapsed: float) -> float:
        return self.base + self.increment * (elapsed // self.interval)

    def __repr__(self) -> str:
        return (
            f"StepEscalator(base={self.base!r}, increment={self.increment!r}, "
            f"interval={self.interval!r}, cap={self.cap!r}, floor={self.floor!r})"
        )


__all__ = ["Escalator", "LinearEscalator", "StepEscalator"]

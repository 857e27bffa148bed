"""Vote decay strategies.

A decay strategy maps a vote's age (seconds since it was cast) to a weight
multiplier. Older votes carry less influence. Each strategy is a pure
function of age, parameterized by a single positive time value:

- ExponentialDecay: weight = 0.5 ** (age / half_life)
- LinearDecay:      weight = max(0.1, 1 - age / duration)
- StepDecay:        weight = 1 / (floor(age / step) + 1)

Negative ages (clock stepped backwards) are treated as age 0.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .types import require_positive


# Internal floor of LinearDecay, independent of the aggregator's min_weight
LINEAR_DECAY_FLOOR = 0.1


class DecayStrategy(ABC):
    """Abstract base class for decay strategies.

    Subclasses implement ``weight`` for a single age and may override
    ``weights`` with a vectorized form. Both must agree element-wise.
    """

    #: Selector used by the CLI and configuration
    name: str = ""

    @abstractmethod
    def weight(self, age: float) -> float:
        """Weight multiplier for a vote of the given age in seconds."""
        pass

    def weights(self, ages: ArrayLike) -> NDArray[np.float64]:
        """Weights for an array of ages."""
        arr = np.asarray(ages, dtype=np.float64)
        if arr.size == 0:
            return np.array([], dtype=np.float64)
        return np.array([self.weight(a) for a in arr.ravel()], dtype=np.float64).reshape(arr.shape)

    @property
    @abstractmethod
    def period(self) -> float:
        """The strategy's time parameter in seconds."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.period!r})"


class ExponentialDecay(DecayStrategy):
    """Halves a vote's weight every ``half_life`` seconds.

    Range (0, 1]: 1.0 at age 0, exactly 0.5 at age == half_life, never 0.
    """

    name = "exp"

    def __init__(self, half_life: float) -> None:
        self.half_life = require_positive(half_life, "half_life")

    @property
    def period(self) -> float:
        return self.half_life

    def weight(self, age: float) -> float:
        age = max(0.0, float(age))
        return float(0.5 ** (age / self.half_life))

    def weights(self, ages: ArrayLike) -> NDArray[np.float64]:
        arr = np.maximum(0.0, np.asarray(ages, dtype=np.float64))
        return np.power(0.5, arr / self.half_life)


class LinearDecay(DecayStrategy):
    """Loses weight linearly over ``duration`` seconds down to a 0.1 floor.

    The floor is reached at age 0.9 * duration and held from then on.
    """

    name = "linear"

    def __init__(self, duration: float) -> None:
        self.duration = require_positive(duration, "duration")
        # Age from which the weight sits on the floor
        self._floor_age = (1.0 - LINEAR_DECAY_FLOOR) * self.duration

    @property
    def period(self) -> float:
        return self.duration

    def weight(self, age: float) -> float:
        age = max(0.0, float(age))
        if age >= self._floor_age:
            return LINEAR_DECAY_FLOOR
        return max(LINEAR_DECAY_FLOOR, 1.0 - age / self.duration)

    def weights(self, ages: ArrayLike) -> NDArray[np.float64]:
        arr = np.maximum(0.0, np.asarray(ages, dtype=np.float64))
        linear = np.maximum(LINEAR_DECAY_FLOOR, 1.0 - arr / self.duration)
        return np.where(arr >= self._floor_age, LINEAR_DECAY_FLOOR, linear)


class StepDecay(DecayStrategy):
    """Drops weight in discrete steps of ``step`` seconds.

    weight = 1 / (k + 1) for age in [k * step, (k + 1) * step), giving the
    sequence 1, 1/2, 1/3, ... which never reaches 0.
    """

    name = "step"

    def __init__(self, step: float) -> None:
        self.step = require_positive(step, "step")

    @property
    def period(self) -> float:
        return self.step

    def weight(self, age: float) -> float:
        age = max(0.0, float(age))
        steps = age // self.step
        return 1.0 / (steps + 1.0)

    def weights(self, ages: ArrayLike) -> NDArray[np.float64]:
        arr = np.maximum(0.0, np.asarray(ages, dtype=np.float64))
        steps = np.floor_divide(arr, self.step)
        return 1.0 / (steps + 1.0)


__all__ = [
    "LINEAR_DECAY_FLOOR",
    "DecayStrategy",
    "ExponentialDecay",
    "LinearDecay",
    "StepDecay",
]

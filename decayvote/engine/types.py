"""Type definitions and errors for the consensus engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional


class DecayVoteError(Exception):
    """Base class for engine errors."""

    pass


class ConfigurationError(DecayVoteError, ValueError):
    """Raised when a strategy, window or aggregator is built with invalid parameters."""

    pass


@dataclass(frozen=True)
class Vote:
    """A single vote for ``value`` cast at ``cast_at`` (clock seconds)."""

    value: str
    cast_at: float


@dataclass(frozen=True)
class ConsensusSnapshot:
    """Outcome of evaluating the vote list at one instant.

    ``weights`` and ``shares`` are keyed by vote value in sorted order.
    ``winner`` is None when no value reached ``threshold``.
    """

    threshold: float
    total_weight: float
    vote_count: int
    elapsed: float
    weights: Dict[str, float] = field(default_factory=dict)
    shares: Dict[str, float] = field(default_factory=dict)
    winner: Optional[str] = None

    @property
    def decided(self) -> bool:
        return self.winner is not None


def require_positive(value: float, name: str) -> float:
    """Return ``value`` as float, rejecting zero, negative and non-finite input.

    Raises:
        ConfigurationError: If value is not a finite number > 0
    """
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(v):
        raise ConfigurationError(f"{name} must be finite, got {v}")
    if v <= 0:
        raise ConfigurationError(f"{name} must be > 0, got {v}")
    return v


def require_finite(value: float, name: str) -> float:
    """Return ``value`` as float, rejecting NaN and infinities."""
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(v):
        raise ConfigurationError(f"{name} must be finite, got {v}")
    return v


__all__ = [
    "DecayVoteError",
    "ConfigurationError",
    "Vote",
    "ConsensusSnapshot",
    "require_positive",
    "require_finite",
]

"""Time-decayed consensus over votes cast in a window.

Algorithm (evaluated on demand, against a single clock reading):
1. threshold = escalator.threshold(window.elapsed())
2. For each vote: w = max(decay.weight(now - cast_at), min_weight)
3. Sum w per distinct value; total = sum of the per-value sums
4. total == 0 -> no decision
5. Values whose share (sum / total) >= threshold qualify. The winner is the
   qualifying value with the highest share, then the earliest first vote,
   then the lexicographically smallest value.
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Dict, List, Optional, Tuple

import numpy as np

from .decay import DecayStrategy
from .escalator import Escalator
from .types import ConfigurationError, ConsensusSnapshot, Vote
from .window import Window

logger = logging.getLogger(__name__)

DEFAULT_MIN_WEIGHT = 0.1


class Consensus:
    """Aggregates votes into a decision with time decay and an escalating bar.

    Votes are only accepted while the window is open; late casts are dropped
    silently. Check ``is_window_open()`` to tell the two apart.

    Example:
        clock = ManualClock()
        consensus = Consensus(
            ExponentialDecay(60),
            LinearEscalator(base=0.51),
            Window(10, clock=clock),
        )
        consensus.cast("A")
        consensus.result()  # "A"
    """

    def __init__(
        self,
        decay: DecayStrategy,
        escalator: Escalator,
        window: Window,
        min_weight: float = DEFAULT_MIN_WEIGHT,
    ) -> None:
        """Initialize the aggregator.

        Args:
            decay: Strategy turning vote age into weight
            escalator: Strategy turning elapsed time into the winning share
            window: Window gating casts; its clock is the engine's time source
            min_weight: Floor applied to every decayed vote weight

        Raises:
            ConfigurationError: If min_weight is negative or not finite
        """
        try:
            min_weight = float(min_weight)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"min_weight must be a number, got {min_weight!r}") from e
        if not math.isfinite(min_weight) or min_weight < 0:
            raise ConfigurationError(f"min_weight must be a finite number >= 0, got {min_weight}")

        self._decay = decay
        self._escalator = escalator
        self._window = window
        self._min_weight = min_weight
        self._votes: List[Vote] = []
        self._lock = threading.Lock()

    # ─────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────

    def cast(self, value: str) -> None:
        """Record a vote for ``value`` if the window is still open."""
        now = self._window.clock()
        with self._lock:
            if not self._window.is_open(now):
                logger.debug("Dropped late vote for %r (window closed)", value)
                return
            self._votes.append(Vote(value=value, cast_at=now))
            logger.debug("Vote %d cast for %r", len(self._votes), value)

    # ─────────────────────────────────────────────────────────────────────
    # Evaluation
    # ─────────────────────────────────────────────────────────────────────

    def snapshot(self) -> ConsensusSnapshot:
        """Evaluate all votes against one clock reading."""
        with self._lock:
            votes = tuple(self._votes)
        now = self._window.clock()

        elapsed = self._window.elapsed(now)
        threshold = self._escalator.threshold(elapsed)

        totals, first_cast = self._tally(votes, now)
        # Process values in deterministic order
        values = sorted(totals)
        total = float(sum(totals[v] for v in values))

        if total == 0:
            logger.debug("No decision: total weight is zero (%d votes)", len(votes))
            return ConsensusSnapshot(
                threshold=threshold,
                total_weight=0.0,
                vote_count=len(votes),
                elapsed=elapsed,
                weights={v: totals[v] for v in values},
                shares={v: 0.0 for v in values},
                winner=None,
            )

        shares = {v: totals[v] / total for v in values}
        qualifying = [v for v in values if shares[v] >= threshold]
        winner = None
        if qualifying:
            winner = min(qualifying, key=lambda v: (-shares[v], first_cast[v], v))

        logger.debug(
            "Evaluated %d votes over %d values: threshold=%.4f winner=%r",
            len(votes),
            len(values),
            threshold,
            winner,
        )
        return ConsensusSnapshot(
            threshold=threshold,
            total_weight=total,
            vote_count=len(votes),
            elapsed=elapsed,
            weights={v: totals[v] for v in values},
            shares=shares,
            winner=winner,
        )

    def result(self) -> Optional[str]:
        """The winning value, or None when no value reaches the threshold."""
        return self.snapshot().winner

    def _tally(
        self,
        votes: Tuple[Vote, ...],
        now: float,
    ) -> Tuple[Dict[str, float], Dict[str, float]]:
        """Per-value decayed weight sums and first-cast timestamps."""
        totals: Dict[str, float] = {}
        first_cast: Dict[str, float] = {}
        if not votes:
            return totals, first_cast

        ages = now - np.fromiter((v.cast_at for v in votes), dtype=np.float64, count=len(votes))
        weights = np.maximum(self._decay.weights(ages), self._min_weight)

        for vote, w in zip(votes, weights):
            totals[vote.value] = totals.get(vote.value, 0.0) + float(w)
            if vote.value not in first_cast:
                first_cast[vote.value] = vote.cast_at

        return totals, first_cast

    # ─────────────────────────────────────────────────────────────────────
    # Introspection
    # ─────────────────────────────────────────────────────────────────────

    def vote_count(self) -> int:
        with self._lock:
            return len(self._votes)

    def current_threshold(self) -> float:
        return self._escalator.threshold(self._window.elapsed())

    def is_window_open(self) -> bool:
        return self._window.is_open()

    def time_remaining(self) -> Optional[float]:
        """Seconds until the window closes, None once it has run past its duration."""
        return self._window.remaining()

    @property
    def votes(self) -> Tuple[Vote, ...]:
        with self._lock:
            return tuple(self._votes)

    @property
    def window(self) -> Window:
        return self._window

    @property
    def decay(self) -> DecayStrategy:
        return self._decay

    @property
    def escalator(self) -> Escalator:
        return self._escalator

    @property
    def min_weight(self) -> float:
        return self._min_weight


__all__ = ["DEFAULT_MIN_WEIGHT", "Consensus"]

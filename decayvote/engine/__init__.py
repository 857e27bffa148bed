"""Consensus engine.

Contains:
- Vote and window data model
- Decay strategies (exponential, linear, step)
- Threshold escalators (linear, step)
- The Consensus aggregator
"""

from __future__ import annotations

from .types import (
    ConfigurationError,
    ConsensusSnapshot,
    DecayVoteError,
    Vote,
)
from .clock import Clock, ManualClock, system_clock
from .window import Window
from .decay import (
    LINEAR_DECAY_FLOOR,
    DecayStrategy,
    ExponentialDecay,
    LinearDecay,
    StepDecay,
)
from .escalator import Escalator, LinearEscalator, StepEscalator
from .consensus import DEFAULT_MIN_WEIGHT, Consensus

__all__ = [
    "ConfigurationError",
    "ConsensusSnapshot",
    "DecayVoteError",
    "Vote",
    "Clock",
    "ManualClock",
    "system_clock",
    "Window",
    "LINEAR_DECAY_FLOOR",
    "DecayStrategy",
    "ExponentialDecay",
    "LinearDecay",
    "StepDecay",
    "Escalator",
    "LinearEscalator",
    "StepEscalator",
    "DEFAULT_MIN_WEIGHT",
    "Consensus",
]

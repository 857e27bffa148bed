"""Strategy selection: turn validated parameters into a ready engine."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from decayvote.config.params import (
    ConsensusParams,
    DecayParams,
    EscalatorParams,
    get_consensus_params,
)

from .clock import Clock, system_clock
from .consensus import Consensus
from .decay import DecayStrategy, ExponentialDecay, LinearDecay, StepDecay
from .escalator import Escalator, LinearEscalator, StepEscalator
from .types import ConfigurationError
from .window import Window


DecayBuilder = Callable[[DecayParams], DecayStrategy]
EscalatorBuilder = Callable[[EscalatorParams], Escalator]


def _linear_escalator(params: EscalatorParams) -> Escalator:
    return LinearEscalator(
        base=params.base,
        slope=params.slope,
        cap=params.cap,
        floor=params.floor,
    )


def _step_escalator(params: EscalatorParams) -> Escalator:
    return StepEscalator(
        base=params.base,
        increment=params.increment,
        interval=params.interval_seconds,
        cap=params.cap,
        floor=params.floor,
    )


# Selector -> builder; the keys are the CLI choices
DECAY_STRATEGIES: Dict[str, DecayBuilder] = {
    ExponentialDecay.name: lambda p: ExponentialDecay(p.half_life_seconds),
    LinearDecay.name: lambda p: LinearDecay(p.linear_duration_seconds),
    StepDecay.name: lambda p: StepDecay(p.step_seconds),
}

ESCALATOR_STRATEGIES: Dict[str, EscalatorBuilder] = {
    LinearEscalator.name: _linear_escalator,
    StepEscalator.name: _step_escalator,
}


def make_decay(params: DecayParams) -> DecayStrategy:
    """Build the decay strategy named by ``params.kind``.

    Raises:
        ConfigurationError: If the selector is unknown
    """
    builder = DECAY_STRATEGIES.get(params.kind)
    if builder is None:
        raise ConfigurationError(
            f"unknown decay strategy {params.kind!r}; expected one of {sorted(DECAY_STRATEGIES)}"
        )
    return builder(params)


def make_escalator(params: EscalatorParams) -> Escalator:
    """Build the escalator named by ``params.kind``.

    Raises:
        ConfigurationError: If the selector is unknown
    """
    builder = ESCALATOR_STRATEGIES.get(params.kind)
    if builder is None:
        raise ConfigurationError(
            f"unknown escalator {params.kind!r}; expected one of {sorted(ESCALATOR_STRATEGIES)}"
        )
    return builder(params)


def build_consensus(
    params: Optional[ConsensusParams] = None,
    clock: Optional[Clock] = None,
) -> Consensus:
    """Build a Consensus whose window opens at the clock's current reading.

    Args:
        params: Engine parameters (uses defaults if None)
        clock: Time source (wall clock if None)
    """
    params = params or get_consensus_params()
    if clock is None:
        clock = system_clock
    return Consensus(
        decay=make_decay(params.decay),
        escalator=make_escalator(params.escalator),
        window=Window(params.window.duration_seconds, clock=clock),
        min_weight=params.aggregator.min_weight,
    )


__all__ = [
    "DECAY_STRATEGIES",
    "ESCALATOR_STRATEGIES",
    "make_decay",
    "make_escalator",
    "build_consensus",
]

"""Consensus engine parameters.

All tunable values live here so the CLI, the factory and tests share one
set of defaults and bounds. Environment overrides use the DECAYVOTE__ prefix
with double underscores between group and field, for example:

    DECAYVOTE__DECAY__KIND=linear
    DECAYVOTE__DECAY__HALF_LIFE_SECONDS=30
    DECAYVOTE__ESCALATOR__BASE=0.6
    DECAYVOTE__WINDOW__DURATION_SECONDS=120
    DECAYVOTE__AGGREGATOR__MIN_WEIGHT=0.05
"""

from __future__ import annotations

import os
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from decayvote.engine.types import ConfigurationError

ENV_PREFIX = "DECAYVOTE__"


class DecayParams(BaseModel):
    """Decay strategy selection and per-strategy time parameters."""

    kind: Literal["exp", "linear", "step"] = Field(
        default="exp",
        description="Decay strategy selector.",
    )
    half_life_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Exponential half-life. After this many seconds a vote's weight is halved.",
    )
    linear_duration_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Linear decay span. Weight reaches the 0.1 floor at 90% of it.",
    )
    step_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Step decay interval. Weight drops to 1/(k+1) after k steps.",
    )


class EscalatorParams(BaseModel):
    """Threshold escalator selection and shape."""

    kind: Literal["linear", "step"] = Field(
        default="linear",
        description="Escalator selector.",
    )
    base: float = Field(
        default=0.51,
        ge=0,
        le=1,
        description="Winning share required at the start of the window.",
    )
    slope: float = Field(
        default=0.0,
        description="Linear escalator: change in required share per second.",
    )
    increment: float = Field(
        default=0.05,
        description="Step escalator: change in required share per interval.",
    )
    interval_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Step escalator: seconds between increments.",
    )
    cap: float = Field(
        default=1.0,
        ge=0,
        le=1,
        description="Upper bound on the required share.",
    )
    floor: float = Field(
        default=0.0,
        ge=0,
        le=1,
        description="Lower bound on the required share.",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "EscalatorParams":
        if self.floor > self.cap:
            raise ValueError(f"floor {self.floor} > cap {self.cap}")
        return self


class WindowParams(BaseModel):
    """Voting window length."""

    duration_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Seconds during which votes are accepted.",
    )


class AggregatorParams(BaseModel):
    """Aggregation parameters."""

    min_weight: float = Field(
        default=0.1,
        ge=0,
        le=1,
        description="Floor applied to every decayed vote weight.",
    )


class ConsensusParams(BaseModel):
    """Master configuration for the consensus engine."""

    decay: DecayParams = Field(default_factory=DecayParams)
    escalator: EscalatorParams = Field(default_factory=EscalatorParams)
    window: WindowParams = Field(default_factory=WindowParams)
    aggregator: AggregatorParams = Field(default_factory=AggregatorParams)

    @classmethod
    def build(cls, data: Mapping[str, Any]) -> "ConsensusParams":
        """Validate a nested mapping, raising ConfigurationError on bad input."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["ConsensusParams"] = None,
    ) -> "ConsensusParams":
        """Load parameters, applying DECAYVOTE__<GROUP>__<FIELD> overrides.

        Unknown groups or fields are ignored. Values are validated by the
        models, so a malformed override raises ConfigurationError rather than
        silently falling back to the default.
        """
        env = os.environ if environ is None else environ
        data = (base or DEFAULT_CONSENSUS_PARAMS).model_dump()

        for key, raw in env.items():
            if not key.startswith(ENV_PREFIX):
                continue
            parts = key[len(ENV_PREFIX):].lower().split("__")
            if len(parts) != 2:
                continue
            group, name = parts
            if group not in data or name not in data[group]:
                continue
            data[group][name] = raw

        return cls.build(data)

    def with_overrides(self, overrides: Mapping[str, Mapping[str, Any]]) -> "ConsensusParams":
        """Copy with per-group overrides; None values are skipped."""
        data: Dict[str, Dict[str, Any]] = self.model_dump()
        for group, fields in overrides.items():
            for name, value in fields.items():
                if value is not None:
                    data.setdefault(group, {})[name] = value
        return type(self).build(data)


# Default instance for easy import
DEFAULT_CONSENSUS_PARAMS = ConsensusParams()


def get_consensus_params() -> ConsensusParams:
    """Get the default consensus parameters."""
    return DEFAULT_CONSENSUS_PARAMS


__all__ = [
    "ENV_PREFIX",
    "DecayParams",
    "EscalatorParams",
    "WindowParams",
    "AggregatorParams",
    "ConsensusParams",
    "DEFAULT_CONSENSUS_PARAMS",
    "get_consensus_params",
]

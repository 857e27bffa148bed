"""Tests for consensus parameters."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from decayvote.config.params import (
    DEFAULT_CONSENSUS_PARAMS,
    ConsensusParams,
    DecayParams,
    EscalatorParams,
    WindowParams,
    get_consensus_params,
)
from decayvote.engine.types import ConfigurationError


class TestDefaults:
    """Default values match the CLI's documented defaults."""

    def test_default_instance(self):
        assert get_consensus_params() is DEFAULT_CONSENSUS_PARAMS

    def test_default_values(self):
        params = ConsensusParams()
        assert params.decay.kind == "exp"
        assert params.decay.half_life_seconds == 60.0
        assert params.decay.linear_duration_seconds == 300.0
        assert params.decay.step_seconds == 60.0
        assert params.escalator.kind == "linear"
        assert params.escalator.base == 0.51
        assert params.escalator.slope == 0.0
        assert params.escalator.cap == 1.0
        assert params.escalator.floor == 0.0
        assert params.window.duration_seconds == 300.0
        assert params.aggregator.min_weight == 0.1


class TestBounds:
    """Parameter models reject degenerate values."""

    @pytest.mark.parametrize(
        "field", ["half_life_seconds", "linear_duration_seconds", "step_seconds"]
    )
    def test_zero_decay_period_rejected(self, field):
        with pytest.raises(ValidationError):
            DecayParams(**{field: 0})

    def test_unknown_decay_kind_rejected(self):
        with pytest.raises(ValidationError):
            DecayParams(kind="cubic")

    def test_zero_window_rejected(self):
        with pytest.raises(ValidationError):
            WindowParams(duration_seconds=0)

    def test_floor_above_cap_rejected(self):
        with pytest.raises(ValidationError):
            EscalatorParams(cap=0.5, floor=0.6)

    def test_build_wraps_validation_error(self):
        with pytest.raises(ConfigurationError):
            ConsensusParams.build({"window": {"duration_seconds": -1}})


class TestFromEnv:
    """Tests for environment overrides."""

    def test_no_overrides(self):
        assert ConsensusParams.from_env(environ={}) == ConsensusParams()

    def test_overrides_applied(self):
        params = ConsensusParams.from_env(environ={
            "DECAYVOTE__DECAY__KIND": "linear",
            "DECAYVOTE__DECAY__HALF_LIFE_SECONDS": "30",
            "DECAYVOTE__ESCALATOR__BASE": "0.6",
            "DECAYVOTE__WINDOW__DURATION_SECONDS": "120",
            "DECAYVOTE__AGGREGATOR__MIN_WEIGHT": "0.05",
        })
        assert params.decay.kind == "linear"
        assert params.decay.half_life_seconds == 30.0
        assert params.escalator.base == 0.6
        assert params.window.duration_seconds == 120.0
        assert params.aggregator.min_weight == 0.05

    def test_unknown_keys_ignored(self):
        params = ConsensusParams.from_env(environ={
            "DECAYVOTE__NOPE__X": "1",
            "DECAYVOTE__DECAY__NOPE": "1",
            "DECAYVOTE__TOO__MANY__PARTS": "1",
            "OTHER__DECAY__KIND": "step",
        })
        assert params == ConsensusParams()

    def test_invalid_override_raises(self):
        with pytest.raises(ConfigurationError):
            ConsensusParams.from_env(environ={"DECAYVOTE__DECAY__STEP_SECONDS": "0"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("DECAYVOTE__DECAY__KIND", "step")
        assert ConsensusParams.from_env().decay.kind == "step"


class TestWithOverrides:
    """Tests for per-field overrides."""

    def test_none_values_skipped(self):
        params = ConsensusParams().with_overrides({"decay": {"kind": None}})
        assert params.decay.kind == "exp"

    def test_values_applied(self):
        params = ConsensusParams().with_overrides({
            "decay": {"kind": "step"},
            "escalator": {"base": 0.75},
        })
        assert params.decay.kind == "step"
        assert params.escalator.base == 0.75

    def test_invalid_value_raises(self):
        with pytest.raises(ConfigurationError):
            ConsensusParams().with_overrides({"escalator": {"base": 1.5}})

    def test_original_unchanged(self):
        original = ConsensusParams()
        original.with_overrides({"window": {"duration_seconds": 10}})
        assert original.window.duration_seconds == 300.0

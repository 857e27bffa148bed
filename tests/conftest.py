"""Shared fixtures for decayvote tests."""

from __future__ import annotations

import os

import pytest

from decayvote.config.params import ENV_PREFIX
from decayvote.engine.clock import ManualClock


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep .env files and stray DECAYVOTE__ variables out of tests."""
    monkeypatch.setenv("DECAYVOTE_TEST_MODE", "true")
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at an arbitrary epoch offset."""
    return ManualClock(start=1_000.0)

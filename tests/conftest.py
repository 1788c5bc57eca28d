"""Shared test fixtures: reference instants, profiles and session requests."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import pytest

from protocol_engine.engine import ProtocolEngine
from protocol_engine.models.enums import DurationBucket, Intensity, SessionTimeBucket
from protocol_engine.models.profile import Intolerance, UserProfile
from protocol_engine.models.session import SessionContext
from protocol_engine.phases.context import GenerationContext

# Wednesday 12 June 2024, 08:00 local
REFERENCE_TIME = datetime(2024, 6, 12, 8, 0)


@pytest.fixture
def reference_time() -> datetime:
    return REFERENCE_TIME


@pytest.fixture
def default_profile() -> UserProfile:
    """70 kg male, no intolerances or diagnoses."""
    return UserProfile.default()


@pytest.fixture
def dairy_free_profile() -> UserProfile:
    return UserProfile(weight_kg=70.0, intolerances=(Intolerance("Dairy"),))


@pytest.fixture
def fructose_free_profile() -> UserProfile:
    return UserProfile(weight_kg=70.0, intolerances=(Intolerance("Fructose"),))


@pytest.fixture
def ibs_d_profile() -> UserProfile:
    return UserProfile(weight_kg=68.0, diagnoses=("IBS-D (2019)",))


@pytest.fixture
def make_session() -> Callable[..., SessionContext]:
    """Factory for session requests with green-zone, 2hr+ defaults."""

    def _make(**overrides) -> SessionContext:
        fields = dict(
            session_time=SessionTimeBucket.TWO_HOURS_PLUS,
            intensity=Intensity.MAX_EFFORT,
            duration=DurationBucket.MEDIUM,
            gut_scale=9,
            reference_time=REFERENCE_TIME,
        )
        fields.update(overrides)
        return SessionContext(**fields)

    return _make


@pytest.fixture
def make_ctx(make_session) -> Callable[..., GenerationContext]:
    """Factory for phase-level generation contexts."""

    def _make(**overrides) -> GenerationContext:
        return GenerationContext.from_session(make_session(**overrides))

    return _make


@pytest.fixture(scope="session")
def engine() -> ProtocolEngine:
    return ProtocolEngine()

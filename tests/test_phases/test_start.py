"""Tests for the start event."""

from __future__ import annotations

from protocol_engine.models.enums import EventType, Intensity, RiskLevel
from protocol_engine.phases.session.start import StartPhase


class TestStartPhase:
    def setup_method(self) -> None:
        self.phase = StartPhase()

    def test_max_effort(self, make_ctx) -> None:
        (event,) = self.phase.generate(make_ctx())
        assert event.label == "Start Time"
        assert event.title == "High-Intensity Execution"
        assert event.type == EventType.TRAINING
        assert event.time_markup == "10:00"
        assert event.risk_level == RiskLevel.MEDIUM

    def test_aerobic_for_other_intensities(self, make_ctx) -> None:
        for intensity in (Intensity.ZONE2, Intensity.THRESHOLD):
            (event,) = self.phase.generate(make_ctx(intensity=intensity))
            assert event.title == "Aerobic Maintenance"
            assert event.risk_level == RiskLevel.LOW

    def test_safety_valve_below_seven(self, make_ctx) -> None:
        (event,) = self.phase.generate(make_ctx(gut_scale=6))
        assert event.details[1].startswith("SAFETY CONSTRAINT: IBD Safety Valve engaged.")

    def test_stable_gut_cleared(self, make_ctx) -> None:
        (event,) = self.phase.generate(make_ctx(gut_scale=7))
        assert event.details[1] == "GUT STATUS: Stable. You are cleared to push hard."

    def test_poor_gut_max_effort_is_high_risk(self, make_ctx) -> None:
        (event,) = self.phase.generate(make_ctx(gut_scale=5))
        assert event.risk_level == RiskLevel.HIGH

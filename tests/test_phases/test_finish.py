"""Tests for the finish-line refuel."""

from __future__ import annotations

from protocol_engine.models.enums import EventType
from protocol_engine.phases.session.finish import FinishPhase, finish_offset


class TestFinishPhase:
    def setup_method(self) -> None:
        self.phase = FinishPhase()

    def test_finish_offset_uses_bucket_duration(self, make_ctx) -> None:
        assert finish_offset(make_ctx()) == 210

    def test_finish_offset_prefers_override(self, make_ctx) -> None:
        assert finish_offset(make_ctx(override_duration_minutes=45)) == 165

    def test_finish_event(self, make_ctx) -> None:
        (event,) = self.phase.generate(make_ctx())
        assert event.label == "Finish Line"
        assert event.title == "The Inflammatory Tail"
        assert event.type == EventType.RECOVERY
        assert event.time_markup == "11:30"
        assert event.details[1] == (
            "IMMEDIATE INTAKE: 21g Whey Isolate + 56g Fast Carbs (e.g., Haribo, "
            "White/Sourdough Toast). Do not wait for the adrenaline to settle."
        )

    def test_dairy_free_protein(self, make_ctx, dairy_free_profile) -> None:
        (event,) = self.phase.generate(make_ctx(profile=dairy_free_profile))
        assert "Plant-Based Isolate (Pea/Soy)" in event.details[1]
        assert "Whey" not in event.details[1]

"""Tests for the post-session re-feed."""

from __future__ import annotations

from datetime import datetime

from protocol_engine.models.enums import EventType
from protocol_engine.phases.session.refeed import RefeedPhase


class TestRefeedPhase:
    def setup_method(self) -> None:
        self.phase = RefeedPhase()

    def test_daytime_mucosal_repair(self, make_ctx) -> None:
        (event,) = self.phase.generate(make_ctx())
        assert event.label == "Re-Feed"
        assert event.title == "Mucosal Repair"
        assert event.type == EventType.NUTRITION
        assert event.time_markup == "12:30"

    def test_overnight_recovery(self, make_ctx) -> None:
        # 22:00 start + 90 min + 60 min lands at 00:30
        ctx = make_ctx(reference_time=datetime(2024, 6, 12, 21, 0), override_offset_minutes=60)
        (event,) = self.phase.generate(ctx)
        assert event.title == "Overnight Recovery"
        assert event.type == EventType.RECOVERY
        assert event.time_markup == "Thu 00:30"
        assert any("Casein or Cottage Cheese" in d for d in event.details)

    def test_overnight_dairy_free(self, make_ctx, dairy_free_profile) -> None:
        ctx = make_ctx(
            reference_time=datetime(2024, 6, 12, 21, 0),
            override_offset_minutes=60,
            profile=dairy_free_profile,
        )
        (event,) = self.phase.generate(ctx)
        assert any("Slow-Release Plant Protein" in d for d in event.details)

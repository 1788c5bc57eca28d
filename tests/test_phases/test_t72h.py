"""Tests for the T-72h taper and carb-loading phase."""

from __future__ import annotations

from protocol_engine.models.enums import EventType
from protocol_engine.models.profile import UserProfile
from protocol_engine.phases.prep.t72h import T72hPhase


class TestT72hPhase:
    def setup_method(self) -> None:
        self.phase = T72hPhase()

    def test_needs_three_days_lead(self, make_ctx) -> None:
        assert not self.phase.applies(make_ctx(lead_time_days=2))
        assert self.phase.applies(make_ctx(lead_time_days=3))

    def test_focus_and_carb_loading(self, make_ctx) -> None:
        events = self.phase.generate(make_ctx())
        assert [(e.label, e.title, e.type) for e in events] == [
            ("Day -3 Focus", "General Prep & Volume Taper", EventType.TRAINING),
            ("Day -3 Nutrition", "Carbohydrate Loading Initiation", EventType.NUTRITION),
        ]
        # Start today 10:00 -> Sunday 10:00, loading 12 hours later
        assert events[0].time_markup == "Sun 10:00"
        assert events[1].time_markup == "Sun 22:00"

    def test_carb_target_scales_with_weight(self, make_ctx) -> None:
        events = self.phase.generate(make_ctx())
        assert any("490g - 560g" in d for d in events[1].details)

        heavy = self.phase.generate(make_ctx(profile=UserProfile(weight_kg=80.0)))
        assert any("560g - 640g" in d for d in heavy[1].details)

    def test_suppressed_today_when_compromised(self, make_ctx) -> None:
        # Anchor lands on today at 10:00
        offset = 72 * 60 + 120
        assert self.phase.generate(make_ctx(gut_scale=3, override_offset_minutes=offset)) == []
        assert self.phase.generate(make_ctx(gut_scale=1, override_offset_minutes=offset)) == []

    def test_not_suppressed_on_other_days(self, make_ctx) -> None:
        events = self.phase.generate(make_ctx(gut_scale=3))
        assert len(events) == 2

    def test_yellow_is_not_suppressed(self, make_ctx) -> None:
        offset = 72 * 60 + 120
        assert len(self.phase.generate(make_ctx(gut_scale=5, override_offset_minutes=offset))) == 2

"""Tests for the T-24h sharpening day."""

from __future__ import annotations

from protocol_engine.models.profile import Intolerance, UserProfile
from protocol_engine.phases.prep.t24h import T24hPhase


class TestT24hPhase:
    def setup_method(self) -> None:
        self.phase = T24hPhase()

    def test_needs_one_day_lead(self, make_ctx) -> None:
        assert not self.phase.applies(make_ctx(lead_time_days=0))
        assert self.phase.applies(make_ctx(lead_time_days=1))

    def test_three_events_on_tuesday(self, make_ctx) -> None:
        events = self.phase.generate(make_ctx())
        assert [(e.label, e.title, e.time_markup) for e in events] == [
            ("T-24h Morning", "Sharpening Phase", "Tue 10:00"),
            ("T-24h Lunch", "The Anchor Meal", "Tue 15:00"),
            ("T-24h Dinner", "Early & Small", "Tue 19:00"),
        ]

    def test_dinner_rice_reduced(self, make_ctx) -> None:
        dinner = self.phase.generate(make_ctx())[2]
        assert any(d.startswith("CARB SOURCE: 230g White Rice") for d in dinner.details)

    def test_gluten_free_pasta(self, make_ctx) -> None:
        profile = UserProfile(intolerances=(Intolerance("Gluten"),))
        lunch = self.phase.generate(make_ctx(profile=profile))[1]
        assert any("Rice Noodles/GF Pasta" in d for d in lunch.details)

    def test_early_dinner_not_capped(self, make_ctx) -> None:
        # Start at 05:00 tomorrow: anchor 05:00 today, dinner 17:00
        events = self.phase.generate(make_ctx(override_offset_minutes=21 * 60))
        assert events[2].time_markup == "17:00"

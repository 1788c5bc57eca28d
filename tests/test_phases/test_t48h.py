"""Tests for the T-48h foundation day."""

from __future__ import annotations

from protocol_engine.models.enums import EventType, RiskLevel
from protocol_engine.models.profile import Intolerance, UserProfile
from protocol_engine.phases.prep.t48h import CAFFEINE_LINE, T48hPhase
from protocol_engine.rules.classifier import CAFFEINE_IBS_D_FACTOR


class TestT48hPhase:
    def setup_method(self) -> None:
        self.phase = T48hPhase()

    def test_needs_two_days_lead(self, make_ctx) -> None:
        assert not self.phase.applies(make_ctx(lead_time_days=1))
        assert self.phase.applies(make_ctx(lead_time_days=2))

    def test_four_events_on_monday(self, make_ctx) -> None:
        events = self.phase.generate(make_ctx())
        assert [(e.label, e.time_markup) for e in events] == [
            ("T-48h Morning", "Mon 10:00"),
            ("T-48h Breakfast", "Mon 11:30"),
            ("T-48h Lunch", "Mon 16:00"),
            # 22:00 capped to 19:00
            ("T-48h Dinner", "Mon 19:00"),
        ]
        assert events[0].type == EventType.HYDRATION
        assert all(e.type == EventType.NUTRITION for e in events[1:])

    def test_portions_scaled_to_weight(self, make_ctx) -> None:
        morning, _breakfast, lunch, dinner = self.phase.generate(make_ctx())
        assert any("469ml Water + ~637mg Sodium" in d for d in morning.details)
        assert "PROTEIN SOURCE: 168g Grilled Chicken Breast. Simple, low fat." in lunch.details
        assert any(d.startswith("CARB SOURCE: 280g White Rice") for d in lunch.details)
        assert "PROTEIN SOURCE: 140g Salmon or Lean Beef." in dinner.details
        assert any(d.startswith("CARB SOURCE: 322g Potatoes") for d in dinner.details)

    def test_breakfast_caffeine_allowed(self, make_ctx) -> None:
        breakfast = self.phase.generate(make_ctx())[1]
        assert breakfast.details[-1] == CAFFEINE_LINE
        # The title carries no caffeine mention, so the event is not flagged
        assert breakfast.contains_caffeine is False

    def test_caffeine_intolerance_drops_line(self, make_ctx) -> None:
        profile = UserProfile(intolerances=(Intolerance("Caffeine"),))
        breakfast = self.phase.generate(make_ctx(profile=profile))[1]
        assert CAFFEINE_LINE not in breakfast.details
        assert breakfast.contains_caffeine is False

    def test_dairy_and_gluten_swaps(self, make_ctx) -> None:
        profile = UserProfile(intolerances=(Intolerance("Dairy"), Intolerance("Gluten")))
        breakfast = self.phase.generate(make_ctx(profile=profile))[1]
        text = " ".join(breakfast.details)
        assert "Coconut/Almond Yogurt" in text
        assert "Gluten-Free Toast" in text
        assert "Greek Yogurt" not in text

    def test_ibs_d_breakfast_stays_low_risk(self, make_ctx, ibs_d_profile) -> None:
        events = self.phase.generate(make_ctx(profile=ibs_d_profile))
        breakfast = events[1]
        assert CAFFEINE_LINE in breakfast.details
        assert breakfast.risk_level == RiskLevel.LOW
        assert CAFFEINE_IBS_D_FACTOR not in breakfast.risk_factors
        assert all(e.risk_level == RiskLevel.LOW for e in events)

    def test_suppressed_today_when_compromised(self, make_ctx) -> None:
        offset = 48 * 60 + 120
        assert self.phase.generate(make_ctx(gut_scale=3, override_offset_minutes=offset)) == []
        assert len(self.phase.generate(make_ctx(gut_scale=9, override_offset_minutes=offset))) == 4

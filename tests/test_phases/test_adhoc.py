"""Tests for user-logged ad-hoc event injection."""

from __future__ import annotations

from datetime import datetime

from protocol_engine.models.enums import AdhocType, EventStatus, EventType
from protocol_engine.models.profile import AdhocEvent, UserProfile
from protocol_engine.phases.injection.adhoc import FALLBACK_DETAIL, IMPACT_LINE, AdhocPhase


def _profile(*events: AdhocEvent) -> UserProfile:
    return UserProfile(adhoc_events=events)


class TestAdhocPhase:
    def setup_method(self) -> None:
        self.phase = AdhocPhase()

    def test_not_applicable_without_logs(self, make_ctx) -> None:
        assert not self.phase.applies(make_ctx())

    def test_bowel_movement_without_detail(self, make_ctx) -> None:
        entry = AdhocEvent("a1", AdhocType.BOWEL, datetime(2024, 6, 12, 7, 30))
        (event,) = self.phase.generate(make_ctx(profile=_profile(entry)))
        assert (event.label, event.title, event.type) == ("Health", "Bowel Movement", EventType.RECOVERY)
        assert event.details == (FALLBACK_DETAIL, IMPACT_LINE)
        assert event.time_markup == "07:30"
        assert event.status == EventStatus.COMPLETED

    def test_meal_keeps_detail(self, make_ctx) -> None:
        entry = AdhocEvent("a2", AdhocType.MEAL, datetime(2024, 6, 12, 8, 10), detail="Rice cakes")
        (event,) = self.phase.generate(make_ctx(profile=_profile(entry)))
        assert (event.label, event.title, event.type) == ("Intake", "Meal Logged", EventType.NUTRITION)
        assert event.details[0] == "Rice cakes"
        assert event.status == EventStatus.ACTIVE

    def test_sleep_and_symptom(self, make_ctx) -> None:
        events = self.phase.generate(make_ctx(profile=_profile(
            AdhocEvent("a3", AdhocType.SLEEP, datetime(2024, 6, 11, 23, 0)),
            AdhocEvent("a4", AdhocType.SYMPTOM, datetime(2024, 6, 12, 9, 0), detail="Cramp"),
        )))
        assert [(e.label, e.title) for e in events] == [
            ("Rest", "Sleep"),
            ("Health", "Symptom Logged"),
        ]
        assert events[0].time_markup == "Tue 23:00"

    def test_unmapped_type_uses_generic_log(self, make_ctx) -> None:
        entry = AdhocEvent("a5", AdhocType.WORKOUT, datetime(2024, 6, 12, 6, 0))
        (event,) = self.phase.generate(make_ctx(profile=_profile(entry)))
        assert (event.label, event.title, event.type) == ("Log", "User Log", EventType.RECOVERY)

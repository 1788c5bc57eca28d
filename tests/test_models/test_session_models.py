"""Tests for the request, profile and plan models."""

from __future__ import annotations

from protocol_engine.models.enums import DurationBucket, SessionTimeBucket, Theme
from protocol_engine.models.profile import Intolerance, UserProfile
from protocol_engine.models.timeline import TimelinePlan


class TestSessionContext:
    def test_bucket_offsets(self, make_session) -> None:
        assert make_session(session_time=SessionTimeBucket.JUST_FINISHED).effective_offset == 0
        assert make_session(session_time=SessionTimeBucket.NOW).effective_offset == 0
        assert make_session(session_time=SessionTimeBucket.ONE_HOUR).effective_offset == 60
        assert make_session(session_time=SessionTimeBucket.TWO_HOURS_PLUS).effective_offset == 120
        assert make_session(session_time=SessionTimeBucket.RACE_PREP_72H).effective_offset == 0

    def test_override_offset_wins(self, make_session) -> None:
        assert make_session(override_offset_minutes=0).effective_offset == 0
        assert make_session(override_offset_minutes=-30).effective_offset == -30

    def test_duration_minutes(self, make_session) -> None:
        assert make_session(duration=DurationBucket.SHORT).duration_minutes == 45
        assert make_session(duration=DurationBucket.ULTRA).duration_minutes == 240
        assert make_session(override_duration_minutes=75).duration_minutes == 75

    def test_default_profile(self, make_session) -> None:
        assert make_session().user == UserProfile.default()
        assert make_session().user.weight_kg == 70.0


class TestUserProfile:
    def test_intolerance_exact_match(self) -> None:
        profile = UserProfile(intolerances=(Intolerance("Dairy"),))
        assert profile.has_intolerance("Dairy")
        assert not profile.has_intolerance("dairy")

    def test_diagnosis_substring_match(self) -> None:
        profile = UserProfile(diagnoses=("Crohn's", "IBS-D (2019)"))
        assert profile.has_diagnosis("IBS-D")
        assert not profile.has_diagnosis("IBS-C")


class TestTimelinePlan:
    def test_banner_theme(self) -> None:
        assert TimelinePlan("x", Theme.YELLOW).banner_theme == Theme.YELLOW
        assert TimelinePlan("x", Theme.BLACK, display_theme=Theme.RED).banner_theme == Theme.RED

    def test_find_missing(self) -> None:
        assert TimelinePlan("x", Theme.GREEN).find("Start Time") is None

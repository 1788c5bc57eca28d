"""Tests for ProtocolEngine — orchestration, early return and trace."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from protocol_engine.engine import ProtocolEngine, filter_trailing, generate_timeline
from protocol_engine.models.enums import (
    DurationBucket,
    EventType,
    FutureEventType,
    Intensity,
    RiskLevel,
    SessionStatus,
    SessionTimeBucket,
    Theme,
)
from protocol_engine.models.log_entry import FutureEvent, LogEntry
from protocol_engine.models.timeline import TimelinePlan
from protocol_engine.models.trace import GenerationTrace, PhaseStatus
from protocol_engine.phases.context import EventFactory
from protocol_engine.registry import PhaseRegistry


def _history_entry(gut: int | None, intensity: Intensity = Intensity.MAX_EFFORT) -> LogEntry:
    return LogEntry(
        id="h1",
        timestamp=datetime(2024, 5, 30, 7, 45),
        session_time=SessionTimeBucket.TWO_HOURS_PLUS,
        intensity=intensity,
        duration=DurationBucket.MEDIUM,
        gut_scale=gut,
        status=SessionStatus.COMPLETED,
    )


class TestProtocolEngine:
    def test_generate_with_trace_returns_plan_and_trace(self, engine, make_session) -> None:
        plan, trace = engine.generate_with_trace(make_session())
        assert isinstance(plan, TimelinePlan)
        assert isinstance(trace, GenerationTrace)
        assert trace.theme == Theme.GREEN
        assert not trace.early_return

    def test_every_phase_reported(self, engine, make_session) -> None:
        _, trace = engine.generate_with_trace(make_session())
        assert len(trace.phase_results) == 13

    def test_trace_statuses(self, engine, make_session) -> None:
        _, trace = engine.generate_with_trace(make_session())
        assert trace.result_for("black_zone").status == PhaseStatus.NOT_APPLICABLE
        assert trace.result_for("extended_prep").status == PhaseStatus.NOT_APPLICABLE
        assert trace.result_for("travel").status == PhaseStatus.NOT_APPLICABLE
        start = trace.result_for("start")
        assert start.status == PhaseStatus.FIRED
        assert start.event_count == 1
        assert trace.result_for("t48h").event_count == 4

    def test_suppressed_phase_is_skipped(self, engine, make_session) -> None:
        _, trace = engine.generate_with_trace(
            make_session(gut_scale=3, override_offset_minutes=48 * 60 + 120)
        )
        assert trace.result_for("t48h").status == PhaseStatus.SKIPPED

    def test_stale_events_counted(self, engine, make_session) -> None:
        # Sunday (t72h) and Monday (t48h) events fall outside the trailing window
        _, trace = engine.generate_with_trace(make_session())
        assert trace.dropped_stale == 6

    def test_early_return_trace(self, engine, make_session) -> None:
        plan, trace = engine.generate_with_trace(make_session(gut_scale=2, lead_time_days=0))
        assert trace.early_return
        assert trace.result_for("black_zone").status == PhaseStatus.FIRED
        assert trace.result_for("start").status == PhaseStatus.NOT_APPLICABLE
        assert trace.result_for("start").explanation.startswith("Same-day early return")
        assert len(plan.timeline) == 1

    def test_custom_registry(self, make_session) -> None:
        from protocol_engine.phases.session.start import StartPhase

        registry = PhaseRegistry()
        registry.register(StartPhase())
        plan = ProtocolEngine(registry=registry).generate(make_session())
        assert [e.label for e in plan.timeline] == ["Start Time"]

    def test_memory_context_from_history(self, engine, make_session) -> None:
        plan = engine.generate(make_session(history=(_history_entry(gut=8),)))
        assert plan.memory_context == "Recall: On 2024-05-30, you ran a similar protocol at Gut State 8."

    def test_no_memory_without_match(self, engine, make_session) -> None:
        plan = engine.generate(make_session(history=(_history_entry(gut=5),)))
        assert plan.memory_context is None


class TestFilterTrailing:
    def test_cutoff_is_inclusive(self, reference_time: datetime) -> None:
        factory = EventFactory(reference_time, Intensity.ZONE2, 9)
        at_cutoff = factory.create(-24 * 60, "a", "At cutoff", EventType.NUTRITION, [])
        too_old = factory.create(-24 * 60 - 1, "b", "Too old", EventType.NUTRITION, [])
        future = factory.create(10 * 24 * 60, "c", "Future", EventType.NUTRITION, [])
        kept = filter_trailing([too_old, at_cutoff, future], reference_time)
        assert [e.title for e in kept] == ["At cutoff", "Future"]


class TestEventFactoryCaffeine:
    def test_caffeine_title_flags_ibs_d(self, reference_time: datetime, ibs_d_profile) -> None:
        factory = EventFactory(reference_time, Intensity.ZONE2, 9, ibs_d_profile)
        event = factory.create(30, "Pre-Race", "Caffeine Dose", EventType.NUTRITION, [])
        assert event.contains_caffeine
        assert event.risk_level == RiskLevel.MEDIUM
        assert event.risk_factors == ("Caffeine + IBS-D",)

    def test_caffeine_in_details_only_not_flagged(self, reference_time: datetime, ibs_d_profile) -> None:
        factory = EventFactory(reference_time, Intensity.ZONE2, 9, ibs_d_profile)
        event = factory.create(30, "Breakfast", "Glycogen Refill", EventType.NUTRITION, ["CAFFEINE: Normal amount."])
        assert not event.contains_caffeine
        assert event.risk_level == RiskLevel.LOW


class TestPreview:
    def _event(self, duration: DurationBucket) -> FutureEvent:
        return FutureEvent(
            id="f1",
            date=date(2024, 6, 20),
            type=FutureEventType.RACE,
            title="City 10k",
            intensity=Intensity.MAX_EFFORT,
            duration=duration,
        )

    def test_preview_long_event(self, engine) -> None:
        plan = engine.preview(self._event(DurationBucket.LONG))
        assert plan.theme == Theme.GREEN
        assert plan.headline.startswith("Green Zone (State 2)")
        assert [(e.label, e.time_markup) for e in plan.timeline] == [
            ("T-24h Morning", "Wed 09:00"),
            ("T-24h Lunch", "Wed 14:00"),
            ("T-24h Dinner", "Wed 19:00"),
            ("Start Time", "09:00"),
            ("Intra-Workout", "09:15"),
            ("Finish Line", "12:00"),
            ("Re-Feed", "13:00"),
        ]

    def test_preview_default_duration(self, engine) -> None:
        plan = engine.preview(self._event(DurationBucket.SHORT))
        finish = plan.find("Finish Line")
        assert finish is not None
        assert finish.timestamp == datetime(2024, 6, 20, 10, 30)

    def test_preview_uses_profile(self, engine, dairy_free_profile) -> None:
        plan = engine.preview(self._event(DurationBucket.LONG), profile=dairy_free_profile)
        assert "Plant-Based Isolate" in plan.find("Finish Line").details[1]


class TestGenerateTimeline:
    def test_accepts_string_values(self, reference_time: datetime) -> None:
        plan = generate_timeline(
            session_time="2hr+",
            intensity="max_effort",
            duration="medium",
            gut_scale=9,
            symptoms=[],
            history=[],
            reference_time=reference_time,
        )
        assert plan.theme == Theme.GREEN
        assert len(plan.timeline) == 9

    def test_matches_engine(self, engine, make_session, reference_time: datetime) -> None:
        plan = generate_timeline(
            SessionTimeBucket.ONE_HOUR,
            Intensity.ZONE2,
            DurationBucket.SHORT,
            6,
            (),
            (),
            reference_time,
            lead_time_days=0,
        )
        expected = engine.generate(make_session(
            session_time=SessionTimeBucket.ONE_HOUR,
            intensity=Intensity.ZONE2,
            duration=DurationBucket.SHORT,
            gut_scale=6,
            lead_time_days=0,
        ))
        assert plan == expected

    def test_timestamps_relative_to_reference(self, reference_time: datetime) -> None:
        plan = generate_timeline("1hr", "zone2", "short", 9, [], [], reference_time, lead_time_days=0)
        start = plan.find("Start Time")
        assert start.timestamp == reference_time + timedelta(hours=1)

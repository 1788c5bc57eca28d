"""ProtocolEngine — the orchestrator that assembles a timeline plan."""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from functools import lru_cache
from typing import Sequence

from protocol_engine.models.enums import (
    DEFAULT_LEAD_TIME_DAYS,
    TRAILING_WINDOW_HOURS,
    DurationBucket,
    Intensity,
    SessionTimeBucket,
    Theme,
)
from protocol_engine.models.log_entry import FutureEvent, LogEntry
from protocol_engine.models.profile import UserProfile
from protocol_engine.models.session import SessionContext, TravelPlan
from protocol_engine.models.timeline import TimelineEvent, TimelinePlan
from protocol_engine.models.trace import GenerationTrace, PhaseResult, PhaseStatus
from protocol_engine.phases.context import GenerationContext
from protocol_engine.recall import recall_message
from protocol_engine.registry import PhaseRegistry
from protocol_engine.rules.classifier import headline_for, is_compromised

logger = logging.getLogger(__name__)

# Preview plans assume a 09:00 start on the event date with a good gut.
PREVIEW_START = time(9, 0)
PREVIEW_GUT_SCALE = 8
PREVIEW_LONG_DURATION_MIN = 180
PREVIEW_DEFAULT_DURATION_MIN = 90


class ProtocolEngine:
    """Runs every phase rule against a request and assembles the plan.

    Usage:
        engine = ProtocolEngine()
        plan = engine.generate(session_context)
        plan, trace = engine.generate_with_trace(session_context)
    """

    def __init__(self, registry: PhaseRegistry | None = None) -> None:
        self.registry = registry or PhaseRegistry()

        # Auto-discover phases if using default registry
        if registry is None:
            self.registry.discover_phases()

    def generate(self, session: SessionContext) -> TimelinePlan:
        """Build the complete plan for one request."""
        plan, _trace = self.generate_with_trace(session)
        return plan

    def generate_with_trace(
        self, session: SessionContext
    ) -> tuple[TimelinePlan, GenerationTrace]:
        """Build the plan and record what every phase did.

        Immediate (red/black zone) phases run first. When the event is
        today (lead time 0) and the gut is compromised, generation stops
        there and the plan holds only those events; a black zone is then
        displayed as red.

        Returns:
            A tuple of (TimelinePlan, GenerationTrace).
        """
        ctx = GenerationContext.from_session(session)
        memory = recall_message(
            session.history, session.intensity, session.duration, session.gut_scale
        )
        early_return = is_compromised(ctx.theme) and session.lead_time_days == 0

        events: list[TimelineEvent] = []
        results: list[PhaseResult] = []

        for phase in self.registry.get_all_phases():
            if early_return and not phase.immediate:
                results.append(PhaseResult(
                    phase_id=phase.phase_id,
                    status=PhaseStatus.NOT_APPLICABLE,
                    explanation="Same-day early return for a compromised gut.",
                ))
                continue

            if not phase.applies(ctx):
                results.append(PhaseResult(
                    phase_id=phase.phase_id,
                    status=PhaseStatus.NOT_APPLICABLE,
                    explanation="Phase does not apply to this request.",
                ))
                continue

            emitted = phase.generate(ctx)
            if emitted:
                logger.debug("Phase %s fired with %d events", phase.phase_id, len(emitted))
                events.extend(emitted)
                results.append(PhaseResult(
                    phase_id=phase.phase_id,
                    status=PhaseStatus.FIRED,
                    event_count=len(emitted),
                    explanation=f"Emitted {len(emitted)} events.",
                ))
            else:
                results.append(PhaseResult(
                    phase_id=phase.phase_id,
                    status=PhaseStatus.SKIPPED,
                    explanation="Phase emitted no events.",
                ))

        headline = headline_for(ctx.tier)

        if early_return:
            logger.debug("Early return for %s zone with lead time 0", ctx.theme.value)
            display_theme = Theme.RED if ctx.theme == Theme.BLACK else None
            plan = TimelinePlan(
                headline=headline,
                theme=ctx.theme,
                timeline=tuple(events),
                memory_context=memory,
                display_theme=display_theme,
            )
            return plan, GenerationTrace(
                theme=ctx.theme, phase_results=tuple(results), early_return=True
            )

        kept = filter_trailing(events, session.reference_time)
        plan = TimelinePlan(
            headline=headline,
            theme=ctx.theme,
            timeline=tuple(sorted(kept, key=lambda e: e.timestamp)),
            memory_context=memory,
        )
        trace = GenerationTrace(
            theme=ctx.theme,
            phase_results=tuple(results),
            dropped_stale=len(events) - len(kept),
        )
        return plan, trace

    def preview(
        self, event: FutureEvent, profile: UserProfile | None = None
    ) -> TimelinePlan:
        """Plan for a scheduled event as seen from its own start (09:00 that day)."""
        duration_min = (
            PREVIEW_LONG_DURATION_MIN
            if event.duration == DurationBucket.LONG
            else PREVIEW_DEFAULT_DURATION_MIN
        )
        return self.generate(SessionContext(
            session_time=SessionTimeBucket.TWO_HOURS_PLUS,
            intensity=event.intensity,
            duration=event.duration,
            gut_scale=PREVIEW_GUT_SCALE,
            reference_time=datetime.combine(event.date, PREVIEW_START),
            override_offset_minutes=0,
            override_duration_minutes=duration_min,
            profile=profile,
        ))


def filter_trailing(
    events: Sequence[TimelineEvent], reference_time: datetime
) -> list[TimelineEvent]:
    """Drop events more than 24 hours before the reference. Future events always stay."""
    cutoff = reference_time - timedelta(hours=TRAILING_WINDOW_HOURS)
    return [e for e in events if e.timestamp >= cutoff]


@lru_cache(maxsize=1)
def default_engine() -> ProtocolEngine:
    return ProtocolEngine()


def generate_timeline(
    session_time: SessionTimeBucket | str,
    intensity: Intensity | str,
    duration: DurationBucket | str,
    gut_scale: int,
    symptoms: Sequence[str],
    history: Sequence[LogEntry],
    reference_time: datetime,
    override_offset_minutes: int | None = None,
    override_duration_minutes: int | None = None,
    profile: UserProfile | None = None,
    travel: TravelPlan | None = None,
    lead_time_days: int = DEFAULT_LEAD_TIME_DAYS,
) -> TimelinePlan:
    """Functional entry point: build a plan from loose arguments.

    Bucket and intensity values may be given as enum members or their
    string values ("2hr+", "max_effort", ...).
    """
    session = SessionContext(
        session_time=SessionTimeBucket(session_time),
        intensity=Intensity(intensity),
        duration=DurationBucket(duration),
        gut_scale=gut_scale,
        reference_time=reference_time,
        symptoms=tuple(symptoms),
        history=tuple(history),
        override_offset_minutes=override_offset_minutes,
        override_duration_minutes=override_duration_minutes,
        profile=profile,
        travel=travel,
        lead_time_days=lead_time_days,
    )
    return default_engine().generate(session)

"""Persisted records: session log entries, feedback, and scheduled future events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from protocol_engine.models.analysis import AnalysisReport
from protocol_engine.models.enums import (
    DurationBucket,
    FutureEventType,
    Intensity,
    SessionStatus,
    SessionTimeBucket,
)
from protocol_engine.models.profile import AdhocEvent
from protocol_engine.models.session import TravelPlan
from protocol_engine.models.timeline import TimelinePlan


@dataclass(frozen=True)
class SessionFeedback:
    """Post-protocol feedback entered by the athlete."""

    rating: int  # 1-5
    gut_rating: int  # 1-10
    worked_well: tuple[str, ...] = field(default_factory=tuple)
    worked_badly: tuple[str, ...] = field(default_factory=tuple)
    notes: str = ""
    advice: str | None = None


@dataclass(frozen=True)
class LogEntry:
    """One check-in: the chosen session values, the plan, and its outcome.

    Owned by the storage layer. The engine reads history entries for
    recall and the analysis generator reads feedback.
    """

    id: str
    timestamp: datetime
    session_time: SessionTimeBucket
    intensity: Intensity
    duration: DurationBucket
    gut_scale: int | None
    symptoms: tuple[str, ...] = field(default_factory=tuple)
    plan: TimelinePlan | None = None
    status: SessionStatus = SessionStatus.ACTIVE

    travel: TravelPlan | None = None
    title: str | None = None
    notes: str | None = None
    updated_at: datetime | None = None
    target_start_time: datetime | None = None
    lead_time_days: int | None = None

    adhoc_events: tuple[AdhocEvent, ...] = field(default_factory=tuple)
    feedback: SessionFeedback | None = None
    analysis: AnalysisReport | None = None


@dataclass(frozen=True)
class FutureEvent:
    """A race or session scheduled on the calendar."""

    id: str
    date: date
    type: FutureEventType
    title: str
    intensity: Intensity
    duration: DurationBucket
    processed: bool = False  # True once its prep plan has been generated

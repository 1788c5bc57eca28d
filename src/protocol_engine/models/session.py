"""Session context — the frozen generation request for a single engine call."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from protocol_engine.models.enums import (
    DEFAULT_DURATION_MIN,
    DEFAULT_LEAD_TIME_DAYS,
    DURATION_BUCKET_MIN,
    SESSION_BUCKET_OFFSET_MIN,
    DurationBucket,
    Intensity,
    SessionTimeBucket,
    TravelMode,
)
from protocol_engine.models.profile import UserProfile

if TYPE_CHECKING:
    from protocol_engine.models.log_entry import LogEntry


@dataclass(frozen=True)
class TravelPlan:
    """Travel around the event (flight, drive, ...)."""

    is_traveling: bool = False
    start_time: datetime | None = None
    duration_minutes: int | None = None
    mode: TravelMode = TravelMode.OTHER


@dataclass(frozen=True)
class SessionContext:
    """Immutable bundle of everything the engine needs to build a plan.

    ``reference_time`` is the instant treated as "now". It is injected
    so previews and tests can generate against any instant; the engine
    never reads the wall clock.
    """

    session_time: SessionTimeBucket
    intensity: Intensity
    duration: DurationBucket
    gut_scale: int  # 1-10, 10 = best
    reference_time: datetime

    symptoms: tuple[str, ...] = field(default_factory=tuple)
    history: tuple[LogEntry, ...] = field(default_factory=tuple)

    # Precise timing wins over the buckets when present
    override_offset_minutes: int | None = None
    override_duration_minutes: int | None = None

    profile: UserProfile | None = None
    travel: TravelPlan | None = None
    lead_time_days: int = DEFAULT_LEAD_TIME_DAYS

    @property
    def effective_offset(self) -> int:
        """Minutes from reference_time to the session start."""
        if self.override_offset_minutes is not None:
            return self.override_offset_minutes
        return SESSION_BUCKET_OFFSET_MIN.get(self.session_time, 0)

    @property
    def duration_minutes(self) -> int:
        if self.override_duration_minutes is not None:
            return self.override_duration_minutes
        return DURATION_BUCKET_MIN.get(self.duration, DEFAULT_DURATION_MIN)

    @property
    def user(self) -> UserProfile:
        """The profile, falling back to the canonical default."""
        return self.profile or UserProfile.default()

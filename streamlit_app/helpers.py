"""Utility helpers bridging the Streamlit UI and the protocol engine.

Pure functions for formatting, colour maps, plan grouping, check-in
request construction and regeneration of stored sessions.
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime, timedelta
from typing import Sequence

from protocol_engine.math.clock import minutes_between
from protocol_engine.models.enums import (
    DEFAULT_LEAD_TIME_DAYS,
    AdhocType,
    DurationBucket,
    EventType,
    Gender,
    Intensity,
    RiskLevel,
    SessionTimeBucket,
    Theme,
    TravelMode,
)
from protocol_engine.models.log_entry import LogEntry
from protocol_engine.models.profile import Intolerance, UserProfile
from protocol_engine.models.session import SessionContext, TravelPlan
from protocol_engine.models.timeline import TimelineEvent, TimelinePlan
from protocol_engine.validation import (
    duration_bucket_for,
    validate_duration,
    validate_start_time,
)

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(minutes: float) -> str:
    """Convert minutes to human string. e.g. 90.0 -> '1h 30m'."""
    if minutes <= 0:
        return "0m"
    h = int(minutes) // 60
    m = int(minutes) % 60
    if h > 0 and m > 0:
        return f"{h}h {m}m"
    if h > 0:
        return f"{h}h"
    return f"{m}m"


def day_heading(day: date, today: date) -> str:
    """'Today', 'Tomorrow', 'Yesterday', else e.g. 'Sat 12 Oct'."""
    delta = (day - today).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Tomorrow"
    if delta == -1:
        return "Yesterday"
    return f"{DAY_NAMES[day.weekday()]} {day.day} {day:%b}"


def split_detail(line: str) -> tuple[str | None, str]:
    """Split a 'KEY: Value' detail line. Lines without a key return (None, line)."""
    key, sep, value = line.partition(": ")
    if sep and key.isupper():
        return key, value
    return None, line


# ---------------------------------------------------------------------------
# Color maps and labels
# ---------------------------------------------------------------------------

THEME_COLORS: dict[Theme, str] = {
    Theme.GREEN: "#2ECC71",
    Theme.YELLOW: "#F4D03F",
    Theme.RED: "#E74C3C",
    Theme.BLACK: "#1C1C1C",
    Theme.GOLD: "#D4AC0D",
}

EVENT_TYPE_COLORS: dict[EventType, str] = {
    EventType.NUTRITION: "#F5B041",   # amber
    EventType.HYDRATION: "#4A90D9",   # blue
    EventType.TRAINING: "#2ECC71",    # green
    EventType.RECOVERY: "#AED6F1",    # pastel blue
}

EVENT_TYPE_ICONS: dict[EventType, str] = {
    EventType.NUTRITION: "🍚",
    EventType.HYDRATION: "💧",
    EventType.TRAINING: "🏃",
    EventType.RECOVERY: "🛌",
}

RISK_COLORS: dict[RiskLevel, str] = {
    RiskLevel.LOW: "#82E0AA",
    RiskLevel.MEDIUM: "#F5B041",
    RiskLevel.HIGH: "#E74C3C",
}

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

SESSION_TIME_LABELS: dict[SessionTimeBucket, str] = {
    SessionTimeBucket.JUST_FINISHED: "Just finished",
    SessionTimeBucket.NOW: "Now",
    SessionTimeBucket.ONE_HOUR: "In 1 hour",
    SessionTimeBucket.TWO_HOURS_PLUS: "In 2+ hours",
    SessionTimeBucket.RACE_PREP_72H: "Race prep (72h)",
}

INTENSITY_LABELS: dict[Intensity, str] = {
    Intensity.ZONE2: "Zone 2",
    Intensity.THRESHOLD: "Threshold",
    Intensity.MAX_EFFORT: "Max effort",
}

DURATION_LABELS: dict[DurationBucket, str] = {
    DurationBucket.SHORT: "45 mins",
    DurationBucket.MEDIUM: "90 mins",
    DurationBucket.LONG: "3 hrs",
    DurationBucket.ULTRA: "4 hrs",
}

ADHOC_TYPE_LABELS: dict[AdhocType, str] = {
    AdhocType.BOWEL: "Bowel movement",
    AdhocType.MEAL: "Meal",
    AdhocType.SLEEP: "Sleep",
    AdhocType.SYMPTOM: "Symptom",
    AdhocType.WORKOUT: "Workout",
}

# Stored sessions without a gut score regenerate at the slider default
DEFAULT_GUT_SCALE = 8

KNOWN_INTOLERANCES = ["Dairy", "Gluten", "Caffeine", "Fructose"]
KNOWN_DIAGNOSES = ["Crohn's Disease", "Ulcerative Colitis", "IBS-D", "IBS-C", "Celiac"]


def risk_badge(event: TimelineEvent) -> str | None:
    """Short risk label for non-low events, e.g. 'MEDIUM RISK (Caffeine + IBS-D)'."""
    if event.risk_level == RiskLevel.LOW:
        return None
    badge = f"{event.risk_level.value.upper()} RISK"
    if event.risk_factors:
        badge += f" ({', '.join(event.risk_factors)})"
    return badge


# ---------------------------------------------------------------------------
# Plan grouping
# ---------------------------------------------------------------------------


def group_events_by_day(plan: TimelinePlan) -> list[tuple[date, list[TimelineEvent]]]:
    """Group a plan's events by calendar date, keeping timeline order."""
    groups: list[tuple[date, list[TimelineEvent]]] = []
    for event in plan.timeline:
        day = event.timestamp.date()
        if groups and groups[-1][0] == day:
            groups[-1][1].append(event)
        else:
            groups.append((day, [event]))
    return groups


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------


def build_profile(
    weight_kg: float,
    gender: str,
    height_cm: float | None = None,
    name: str | None = None,
    intolerances: Sequence[str] = (),
    diagnoses: Sequence[str] = (),
    base: UserProfile | None = None,
) -> UserProfile:
    """Build a profile from sidebar values on top of the stored one.

    Fields the sidebar does not edit are carried over from *base*:
    medications, supplements, body fat, logged ad-hoc events, and any
    intolerance or diagnosis outside the sidebar's choices. Selected
    intolerances keep their stored severity; new ones default to moderate.
    """
    base = base or UserProfile()
    stored = {i.name: i for i in base.intolerances}
    chosen = tuple(stored.get(n, Intolerance(name=n)) for n in intolerances)
    other_intolerances = tuple(i for i in base.intolerances if i.name not in KNOWN_INTOLERANCES)
    other_diagnoses = tuple(d for d in base.diagnoses if d not in KNOWN_DIAGNOSES)
    return dataclasses.replace(
        base,
        weight_kg=weight_kg,
        gender=Gender(gender),
        height_cm=height_cm,
        name=name or None,
        intolerances=chosen + other_intolerances,
        diagnoses=tuple(diagnoses) + other_diagnoses,
    )


def build_travel_plan(
    is_traveling: bool,
    mode: str,
    start_time: datetime | None,
    hours: float | None,
) -> TravelPlan | None:
    if not is_traveling:
        return None
    return TravelPlan(
        is_traveling=True,
        start_time=start_time,
        duration_minutes=int(hours * 60) if hours else None,
        mode=TravelMode(mode),
    )


def build_session_context(
    now: datetime,
    session_time: SessionTimeBucket,
    intensity: Intensity,
    duration: DurationBucket | None,
    gut_scale: int,
    start_time: datetime | None = None,
    custom_minutes: int | None = None,
    lead_time_days: int = 3,
    profile: UserProfile | None = None,
    travel: TravelPlan | None = None,
    history: Sequence = (),
    symptoms: Sequence[str] = (),
) -> SessionContext:
    """Validate check-in form values and turn them into an engine request.

    An explicit start time overrides the session-time bucket; a custom
    duration overrides the bucket and picks the matching one.

    Raises:
        InvalidSessionRequest: start time in the past or no duration given.
    """
    validate_start_time(start_time, now)
    validate_duration(duration, custom_minutes)

    if custom_minutes:
        duration = duration_bucket_for(custom_minutes)

    return SessionContext(
        session_time=session_time,
        intensity=intensity,
        duration=duration,
        gut_scale=gut_scale,
        reference_time=now,
        symptoms=tuple(symptoms),
        history=tuple(history),
        override_offset_minutes=minutes_between(now, start_time) if start_time else None,
        override_duration_minutes=custom_minutes or None,
        profile=profile,
        travel=travel,
        lead_time_days=lead_time_days,
    )


def target_start(now: datetime, ctx: SessionContext) -> datetime:
    """Absolute planned start of a request."""
    return now + timedelta(minutes=ctx.effective_offset)


def build_regeneration_context(
    log: LogEntry,
    profile: UserProfile | None,
    now: datetime,
    history: Sequence[LogEntry] = (),
) -> SessionContext:
    """Rebuild a stored session's request so its plan can be regenerated.

    The session's logged ad-hoc events replace the profile's, and the
    offset is re-derived from the planned start.
    """
    profile = dataclasses.replace(profile or UserProfile(), adhoc_events=log.adhoc_events)
    offset = minutes_between(now, log.target_start_time) if log.target_start_time else None
    lead_time_days = DEFAULT_LEAD_TIME_DAYS if log.lead_time_days is None else log.lead_time_days
    return SessionContext(
        session_time=log.session_time,
        intensity=log.intensity,
        duration=log.duration,
        gut_scale=log.gut_scale or DEFAULT_GUT_SCALE,
        reference_time=now,
        symptoms=log.symptoms,
        history=tuple(history),
        override_offset_minutes=offset,
        profile=profile,
        travel=log.travel,
        lead_time_days=lead_time_days,
    )

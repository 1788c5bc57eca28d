"""Clock and time-offset helpers.

Every event in a plan is positioned as a signed minute offset from a single
reference instant ("now"). These helpers turn offsets into absolute
instants, render time labels, and answer the day-boundary questions the
phase routines branch on. Large negative offsets (multi-day taper
lookback) and positive ones (post-event recovery) go through the same
arithmetic.

All datetimes are local wall-clock values; the helpers never read the
system clock.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from protocol_engine.models.enums import (
    ACTIVE_WINDOW_MIN,
    DINNER_CAP_THRESHOLD,
    DINNER_CAP_TIME,
    SLEEP_WINDOW_END_HOUR,
    SLEEP_WINDOW_START_HOUR,
    EventStatus,
)

WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always toward +infinity."""
    return int(math.floor(value + 0.5))


def event_time(reference: datetime, offset_minutes: int) -> datetime:
    """Absolute instant of an event *offset_minutes* after *reference*."""
    return reference + timedelta(minutes=offset_minutes)


def minutes_between(reference: datetime, instant: datetime) -> int:
    """Signed whole minutes from *reference* to *instant*, rounded half-up."""
    return round_half_up((instant - reference).total_seconds() / 60.0)


def format_clock(instant: datetime) -> str:
    """24-hour HH:MM label."""
    return instant.strftime("%H:%M")


def is_same_day(reference: datetime, offset_minutes: int) -> bool:
    """True if the offset lands on the reference's local calendar date."""
    return event_time(reference, offset_minutes).date() == reference.date()


def time_markup(reference: datetime, offset_minutes: int) -> str:
    """Render the time label for an event.

    ``HH:MM`` when the event is on the reference's calendar day, otherwise
    prefixed with the weekday abbreviation, e.g. ``"Sat 09:00"``.
    """
    instant = event_time(reference, offset_minutes)
    clock = format_clock(instant)
    if instant.date() == reference.date():
        return clock
    return f"{WEEKDAY_ABBREVIATIONS[instant.weekday()]} {clock}"


def is_sleep_time(reference: datetime, offset_minutes: int) -> bool:
    """True if the offset's local hour falls in the [23:00, 05:00) sleep window."""
    hour = event_time(reference, offset_minutes).hour
    return hour >= SLEEP_WINDOW_START_HOUR or hour < SLEEP_WINDOW_END_HOUR


def cap_to_dinner_time(reference: datetime, offset_minutes: int) -> int:
    """Clamp a dinner offset so it never lands at or after 19:30.

    Offsets at or after the threshold are moved to exactly 19:00 on the
    same calendar day as originally computed. Earlier offsets are
    returned unchanged.
    """
    planned = event_time(reference, offset_minutes)
    if (planned.hour, planned.minute) >= DINNER_CAP_THRESHOLD:
        hour, minute = DINNER_CAP_TIME
        capped = planned.replace(hour=hour, minute=minute, second=0, microsecond=0)
        return minutes_between(reference, capped)
    return offset_minutes


def event_status(reference: datetime, instant: datetime) -> EventStatus:
    """Status of an event relative to now.

    completed: more than 15 minutes in the past.
    active: within 15 minutes either side of now.
    upcoming: further in the future.
    """
    diff_minutes = (instant - reference).total_seconds() / 60.0
    if diff_minutes < -ACTIVE_WINDOW_MIN:
        return EventStatus.COMPLETED
    if diff_minutes <= ACTIVE_WINDOW_MIN:
        return EventStatus.ACTIVE
    return EventStatus.UPCOMING

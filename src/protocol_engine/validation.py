"""Caller-side request gates.

The engine accepts any structurally valid request. These checks run in
the check-in layer before a request reaches it.
"""

from __future__ import annotations

from datetime import datetime

from protocol_engine.exceptions import InvalidSessionRequest
from protocol_engine.models.enums import DurationBucket


def validate_start_time(start_time: datetime | None, now: datetime) -> None:
    """Reject an explicit start time that is already in the past.

    A missing start time is fine: the session-time bucket applies instead.
    """
    if start_time is not None and start_time < now:
        raise InvalidSessionRequest(
            f"Start time {start_time:%Y-%m-%d %H:%M} is in the past; please select a future time."
        )


def validate_duration(
    duration: DurationBucket | None, custom_minutes: int | None = None
) -> None:
    """Reject requests with neither a duration bucket nor a positive custom duration."""
    if duration is not None:
        return
    if custom_minutes is None or custom_minutes <= 0:
        raise InvalidSessionRequest("A session duration is required.")


def duration_bucket_for(minutes: int) -> DurationBucket:
    """Bucket a custom duration: <60 short, <120 medium, <240 long, else ultra."""
    if minutes < 60:
        return DurationBucket.SHORT
    if minutes < 120:
        return DurationBucket.MEDIUM
    if minutes < 240:
        return DurationBucket.LONG
    return DurationBucket.ULTRA

"""Memory/recall matcher — cites a similar past session in the plan."""

from __future__ import annotations

from typing import Sequence

from protocol_engine.models.enums import RECALL_GUT_TOLERANCE, DurationBucket, Intensity
from protocol_engine.models.log_entry import LogEntry


def find_similar_session(
    history: Sequence[LogEntry],
    intensity: Intensity,
    duration: DurationBucket,
    gut_scale: int,
) -> LogEntry | None:
    """Return the first history entry matching intensity, duration and gut (±2).

    First match in history order, not the closest. Entries without a gut
    score never match.
    """
    for entry in history:
        if entry.intensity != intensity or entry.duration != duration:
            continue
        if entry.gut_scale is None:
            continue
        if abs(entry.gut_scale - gut_scale) <= RECALL_GUT_TOLERANCE:
            return entry
    return None


def recall_message(
    history: Sequence[LogEntry],
    intensity: Intensity,
    duration: DurationBucket,
    gut_scale: int,
) -> str | None:
    match = find_similar_session(history, intensity, duration, gut_scale)
    if match is None:
        return None
    return (
        f"Recall: On {match.timestamp:%Y-%m-%d}, you ran a similar protocol "
        f"at Gut State {match.gut_scale}."
    )

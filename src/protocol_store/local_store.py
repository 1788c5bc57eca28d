"""Key-based local JSON store.

One JSON file per key under a data directory: ``logs.json`` (newest
first), ``profile.json`` and ``future_events.json``. Every write rewrites
the whole file; last write wins. Unreadable files are logged and read as
empty so a corrupt store never blocks the planner.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import tempfile
import uuid
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Callable

from protocol_engine.models.enums import (
    DURATION_BUCKET_MIN,
    AdhocType,
    DurationBucket,
    FutureEventType,
    Intensity,
    SessionStatus,
    SessionTimeBucket,
    Severity,
)
from protocol_engine.models.log_entry import FutureEvent, LogEntry
from protocol_engine.models.profile import AdhocEvent, UserProfile
from protocol_engine.serialization.records import (
    future_event_from_dict,
    future_event_to_dict,
    log_from_dict,
    log_to_dict,
    profile_from_dict,
    profile_to_dict,
)
from protocol_store.exceptions import RecordNotFoundError, StoreCorruptError

logger = logging.getLogger(__name__)

LOGS_KEY = "logs"
PROFILE_KEY = "profile"
FUTURE_EVENTS_KEY = "future_events"

# Sessions with an unknown duration block this long for conflict checks
CONFLICT_DEFAULT_DURATION_MIN = 90
RACE_PREP_WINDOW_DAYS = 3


def _new_id() -> str:
    return str(uuid.uuid4())


class LocalStore:
    """Persists logs, the profile and future events as JSON files.

    Args:
        data_dir: Directory holding the JSON files; created if missing.
        clock: Returns "now" for timestamps. Defaults to ``datetime.now``.
        id_factory: Returns new record ids. Defaults to random UUID4 strings.
    """

    def __init__(
        self,
        data_dir: Path | str,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._dir = Path(data_dir)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._new_id = id_factory

    @property
    def data_dir(self) -> Path:
        return self._dir

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    def get_logs(self) -> list[LogEntry]:
        """All log entries, newest first. A corrupt file reads as empty."""
        try:
            raw = self._read(LOGS_KEY)
        except StoreCorruptError as exc:
            logger.error("Failed to parse logs: %s", exc)
            return []
        if raw is None:
            return []
        try:
            return [log_from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Failed to decode logs: %s", exc)
            return []

    def get_log(self, log_id: str) -> LogEntry:
        for log in self.get_logs():
            if log.id == log_id:
                return log
        raise RecordNotFoundError("log", log_id)

    def get_active_session(self) -> LogEntry | None:
        for log in self.get_logs():
            if log.status == SessionStatus.ACTIVE:
                return log
        return None

    def save_log(
        self,
        session_time: SessionTimeBucket,
        intensity: Intensity,
        duration: DurationBucket,
        gut_scale: int | None,
        **fields: Any,
    ) -> LogEntry:
        """Store a new check-in as the active session.

        Any previously active session is completed. Extra keyword fields
        (plan, travel, title, target_start_time, ...) are set on the entry.
        """
        entry = LogEntry(
            id=self._new_id(),
            timestamp=self._clock(),
            session_time=session_time,
            intensity=intensity,
            duration=duration,
            gut_scale=gut_scale,
            status=SessionStatus.ACTIVE,
            **fields,
        )
        closed = [
            dataclasses.replace(log, status=SessionStatus.COMPLETED)
            if log.status == SessionStatus.ACTIVE
            else log
            for log in self.get_logs()
        ]
        self._write_logs([entry, *closed])
        logger.info("Saved log %s (%d previous sessions)", entry.id, len(closed))
        return entry

    def update_log(self, log_id: str, **updates: Any) -> LogEntry:
        """Apply field updates to one entry and stamp ``updated_at``."""
        logs = self.get_logs()
        for index, log in enumerate(logs):
            if log.id == log_id:
                updated = dataclasses.replace(log, **updates, updated_at=self._clock())
                logs[index] = updated
                self._write_logs(logs)
                logger.info("Updated log %s (%s)", log_id, ", ".join(sorted(updates)))
                return updated
        raise RecordNotFoundError("log", log_id)

    def complete_session(self, log_id: str) -> LogEntry:
        return self.update_log(log_id, status=SessionStatus.COMPLETED)

    def log_adhoc_event(
        self,
        log_id: str,
        adhoc_type: AdhocType,
        detail: str | None = None,
    ) -> LogEntry:
        """Append a user-logged event to a session, stamped with the clock.

        The stored plan is left as is; callers regenerate it with the
        session's ad-hoc events merged into the profile.
        """
        log = self.get_log(log_id)
        event = AdhocEvent(
            id=self._new_id(),
            type=adhoc_type,
            timestamp=self._clock(),
            detail=detail or None,
        )
        return self.update_log(log_id, adhoc_events=(*log.adhoc_events, event))

    def delete_log(self, log_id: str) -> None:
        """Remove an entry. Unknown ids are ignored."""
        logs = self.get_logs()
        remaining = [log for log in logs if log.id != log_id]
        if len(remaining) != len(logs):
            self._write_logs(remaining)
            logger.info("Deleted log %s", log_id)

    def check_conflict(self, start_time: datetime, duration_minutes: int) -> bool:
        """True if the window overlaps an active session's planned window."""
        end_time = start_time + timedelta(minutes=duration_minutes)
        for log in self.get_logs():
            if log.target_start_time is None or log.status == SessionStatus.COMPLETED:
                continue
            log_minutes = DURATION_BUCKET_MIN.get(log.duration, CONFLICT_DEFAULT_DURATION_MIN)
            log_start = log.target_start_time
            log_end = log_start + timedelta(minutes=log_minutes)
            if start_time < log_end and end_time > log_start:
                return True
        return False

    def _write_logs(self, logs: list[LogEntry]) -> None:
        self._write(LOGS_KEY, [log_to_dict(log) for log in logs])

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def save_profile(self, profile: UserProfile) -> None:
        self._write(PROFILE_KEY, profile_to_dict(profile))
        logger.info("Saved profile")

    def get_profile(self) -> UserProfile | None:
        """The stored profile, or None if none is stored or it is unreadable.

        Legacy plain-string intolerances are migrated to
        ``{"name": ..., "severity": "moderate"}`` and written back.
        """
        try:
            raw = self._read(PROFILE_KEY)
        except StoreCorruptError as exc:
            logger.error("Failed to parse profile: %s", exc)
            return None
        if not isinstance(raw, dict):
            return None

        intolerances = raw.get("intolerances")
        if intolerances and isinstance(intolerances[0], str):
            raw["intolerances"] = [
                {"name": name, "severity": Severity.MODERATE.value} for name in intolerances
            ]
            self._write(PROFILE_KEY, raw)
            logger.info("Migrated %d legacy intolerances", len(intolerances))

        return profile_from_dict(raw)

    # ------------------------------------------------------------------
    # Future events
    # ------------------------------------------------------------------

    def get_future_events(self) -> list[FutureEvent]:
        """All scheduled events. A corrupt or undecodable file reads as empty."""
        try:
            raw = self._read(FUTURE_EVENTS_KEY)
        except StoreCorruptError as exc:
            logger.error("Failed to parse future events: %s", exc)
            return []
        try:
            return [future_event_from_dict(item) for item in raw or ()]
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Failed to decode future events: %s", exc)
            return []

    def save_future_event(
        self,
        event_date: date,
        event_type: FutureEventType,
        title: str,
        intensity: Intensity,
        duration: DurationBucket,
    ) -> FutureEvent:
        event = FutureEvent(
            id=self._new_id(),
            date=event_date,
            type=event_type,
            title=title,
            intensity=intensity,
            duration=duration,
        )
        self._write_events([*self.get_future_events(), event])
        logger.info("Saved future event %s on %s", event.id, event_date.isoformat())
        return event

    def delete_future_event(self, event_id: str) -> None:
        """Remove a future event. Unknown ids are ignored."""
        events = self.get_future_events()
        remaining = [e for e in events if e.id != event_id]
        if len(remaining) != len(events):
            self._write_events(remaining)
            logger.info("Deleted future event %s", event_id)

    def mark_event_processed(self, event_id: str) -> FutureEvent:
        """Flag an event whose prep plan has been generated."""
        events = self.get_future_events()
        for index, event in enumerate(events):
            if event.id == event_id:
                events[index] = dataclasses.replace(event, processed=True)
                self._write_events(events)
                logger.info("Marked future event %s processed", event_id)
                return events[index]
        raise RecordNotFoundError("future event", event_id)

    def check_future_conflict(self, day: date) -> str | None:
        """Explain why *day* clashes with a scheduled event, or None.

        A day clashes when an event is already on it, or when it falls in
        the three days before a race (its T-72h prep).
        """
        for event in self.get_future_events():
            if event.date == day:
                return f'Conflict with event: "{event.title}" on this day.'
            if event.type == FutureEventType.RACE:
                days_before = (event.date - day).days
                if 0 < days_before <= RACE_PREP_WINDOW_DAYS:
                    return f'Conflict: This day is part of the T-72h prep for "{event.title}".'
        return None

    def _write_events(self, events: list[FutureEvent]) -> None:
        self._write(FUTURE_EVENTS_KEY, [future_event_to_dict(e) for e in events])

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def _read(self, key: str) -> Any:
        """Parsed JSON for *key*, None if the file does not exist."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StoreCorruptError(f"{path.name}: {exc}", path=str(path)) from exc

    def _write(self, key: str, payload: Any) -> None:
        """Replace *key*'s file atomically."""
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
            os.replace(tmp, path)
        except BaseException:
            os.unlink(tmp)
            raise

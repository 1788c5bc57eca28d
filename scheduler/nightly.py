"""Nightly scheduler — generates prep plans for upcoming calendar events.

Usage:
    python -m scheduler.nightly --once      # single run (for cron)
    python -m scheduler.nightly --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, time

from protocol_engine.engine import ProtocolEngine
from protocol_engine.math.clock import minutes_between
from protocol_engine.models.enums import SessionTimeBucket
from protocol_engine.models.log_entry import FutureEvent, LogEntry
from protocol_engine.models.profile import UserProfile
from protocol_engine.models.session import SessionContext
from protocol_store import LocalStore, StoreError

from scheduler.config import (
    DATA_DIR,
    EVENT_START_HOUR,
    NIGHTLY_HOUR,
    NIGHTLY_MINUTE,
    PREP_LEAD_TIME_DAYS,
)

logger = logging.getLogger(__name__)

# Prep plans assume a settled gut until the athlete checks in
PREP_GUT_SCALE = 8


def _prep_session(
    event: FutureEvent,
    now: datetime,
    start: datetime,
    days_out: int,
    profile: UserProfile | None,
) -> SessionContext:
    return SessionContext(
        session_time=SessionTimeBucket.RACE_PREP_72H,
        intensity=event.intensity,
        duration=event.duration,
        gut_scale=PREP_GUT_SCALE,
        reference_time=now,
        override_offset_minutes=minutes_between(now, start),
        profile=profile,
        lead_time_days=days_out,
    )


def run_prep_cycle(
    store: LocalStore,
    now: datetime,
    engine: ProtocolEngine | None = None,
    lead_time_days: int = PREP_LEAD_TIME_DAYS,
    start_hour: int = EVENT_START_HOUR,
) -> list[LogEntry]:
    """Create prep sessions for every event whose prep window has opened.

    An event qualifies when it is unprocessed and 1..``lead_time_days``
    calendar days away. Nothing is created while a session is active.

    Returns:
        The log entries created, in event order.
    """
    if store.get_active_session() is not None:
        logger.info("Active session in progress, skipping prep generation")
        return []

    engine = engine or ProtocolEngine()
    profile = store.get_profile()
    created: list[LogEntry] = []

    for event in store.get_future_events():
        if event.processed:
            continue
        days_out = (event.date - now.date()).days
        if not 0 < days_out <= lead_time_days:
            continue

        start = datetime.combine(event.date, time(start_hour))
        plan = engine.generate(_prep_session(event, now, start, days_out, profile))
        entry = store.save_log(
            SessionTimeBucket.RACE_PREP_72H,
            event.intensity,
            event.duration,
            PREP_GUT_SCALE,
            plan=plan,
            title=event.title,
            notes=f"Auto-generated prep for {event.title}",
            target_start_time=start,
            lead_time_days=days_out,
        )
        store.mark_event_processed(event.id)
        logger.info(
            "Generated %d-day prep for %s (%d events)",
            days_out,
            event.title,
            len(plan.timeline),
        )
        created.append(entry)

    return created


def nightly_job() -> None:
    """Execute one nightly cycle against the configured data directory."""
    logger.info("Starting nightly job")

    try:
        store = LocalStore(DATA_DIR)
        created = run_prep_cycle(store, datetime.now())
    except StoreError as exc:
        logger.error("Prep generation failed: %s", exc)
        return

    logger.info("Nightly job complete, %d prep plans created", len(created))


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="Gut protocol prep scheduler")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    args = parser.parse_args()

    if args.once:
        nightly_job()
    else:
        from apscheduler.schedulers.blocking import BlockingScheduler

        scheduler = BlockingScheduler()
        scheduler.add_job(
            nightly_job,
            "cron",
            hour=NIGHTLY_HOUR,
            minute=NIGHTLY_MINUTE,
            id="nightly_job",
        )
        logger.info(
            "Scheduler started — nightly job at %02d:%02d",
            NIGHTLY_HOUR,
            NIGHTLY_MINUTE,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()

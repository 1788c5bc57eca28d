"""Tests for the nightly prep cycle."""

from __future__ import annotations

import itertools
import json
from datetime import date, datetime
from pathlib import Path

import pytest

from protocol_engine.models.enums import DurationBucket, FutureEventType, Intensity, SessionTimeBucket
from protocol_store import LocalStore

from scheduler.nightly import PREP_GUT_SCALE, run_prep_cycle

# Wednesday evening
NOW = datetime(2024, 6, 12, 21, 0)


@pytest.fixture
def store(tmp_path: Path) -> LocalStore:
    counter = itertools.count(1)
    return LocalStore(tmp_path, clock=lambda: NOW, id_factory=lambda: f"id-{next(counter)}")


def _add(store: LocalStore, day: date, title: str = "City 10k"):
    return store.save_future_event(
        day, FutureEventType.RACE, title, Intensity.MAX_EFFORT, DurationBucket.MEDIUM
    )


class TestRunPrepCycle:
    def test_generates_prep_for_event_in_window(self, store: LocalStore, engine) -> None:
        event = _add(store, date(2024, 6, 14))
        (entry,) = run_prep_cycle(store, NOW, engine=engine)

        assert entry.session_time == SessionTimeBucket.RACE_PREP_72H
        assert entry.gut_scale == PREP_GUT_SCALE
        assert entry.title == "City 10k"
        assert entry.notes == "Auto-generated prep for City 10k"
        assert entry.target_start_time == datetime(2024, 6, 14, 9, 0)
        assert entry.lead_time_days == 2
        assert entry.plan is not None
        assert entry.plan.find("Start Time").timestamp == datetime(2024, 6, 14, 9, 0)

        assert store.get_future_events()[0].processed
        assert store.get_log(entry.id) == entry
        assert event.id != entry.id

    def test_prep_plan_contains_t48h_day(self, store: LocalStore, engine) -> None:
        _add(store, date(2024, 6, 14))
        (entry,) = run_prep_cycle(store, NOW, engine=engine)
        labels = [e.label for e in entry.plan.timeline]
        assert "T-48h Morning" in labels
        assert "T-24h Lunch" in labels

    def test_out_of_window_events_ignored(self, store: LocalStore, engine) -> None:
        _add(store, date(2024, 6, 12), "Today")
        _add(store, date(2024, 6, 16), "Too far")
        _add(store, date(2024, 6, 10), "Past")
        assert run_prep_cycle(store, NOW, engine=engine) == []
        assert not any(e.processed for e in store.get_future_events())

    def test_processed_events_not_repeated(self, store: LocalStore, engine) -> None:
        _add(store, date(2024, 6, 15))
        assert len(run_prep_cycle(store, NOW, engine=engine)) == 1
        store.complete_session(store.get_logs()[0].id)
        assert run_prep_cycle(store, NOW, engine=engine) == []

    def test_active_session_blocks_cycle(self, store: LocalStore, engine) -> None:
        store.save_log(SessionTimeBucket.NOW, Intensity.ZONE2, DurationBucket.SHORT, 9)
        _add(store, date(2024, 6, 13))
        assert run_prep_cycle(store, NOW, engine=engine) == []
        assert not store.get_future_events()[0].processed

    def test_uses_stored_profile(self, store: LocalStore, engine, dairy_free_profile) -> None:
        store.save_profile(dairy_free_profile)
        _add(store, date(2024, 6, 13))
        (entry,) = run_prep_cycle(store, NOW, engine=engine)
        finish = entry.plan.find("Finish Line")
        assert "Plant-Based Isolate" in finish.details[1]

    def test_custom_lead_and_start_hour(self, store: LocalStore, engine) -> None:
        _add(store, date(2024, 6, 17))
        (entry,) = run_prep_cycle(store, NOW, engine=engine, lead_time_days=5, start_hour=7)
        assert entry.lead_time_days == 5
        assert entry.target_start_time == datetime(2024, 6, 17, 7, 0)

    def test_malformed_event_file_does_not_crash(self, store: LocalStore, engine) -> None:
        (store.data_dir / "future_events.json").write_text(
            json.dumps([{"id": "x", "date": "2024-06-14", "type": "marathon"}]), encoding="utf-8"
        )
        assert run_prep_cycle(store, NOW, engine=engine) == []

"""Tests for tip aggregation from analysed sessions."""

from __future__ import annotations

import dataclasses
import random
from datetime import datetime

from protocol_engine.analysis.coach_report import IBS_D_GUARDRAIL, generate_analysis
from protocol_engine.insights import aggregate_tips
from protocol_engine.models.enums import DurationBucket, Intensity, SessionTimeBucket
from protocol_engine.models.log_entry import LogEntry
from protocol_engine.models.profile import UserProfile


def _log(log_id: str, day: int, analysed: bool = True, profile: UserProfile | None = None) -> LogEntry:
    log = LogEntry(
        id=log_id,
        timestamp=datetime(2024, 6, day, 7, 0),
        session_time=SessionTimeBucket.NOW,
        intensity=Intensity.THRESHOLD,
        duration=DurationBucket.MEDIUM,
        gut_scale=8,
    )
    if not analysed:
        return log
    report = generate_analysis(log, profile=profile, rng=random.Random(0))
    return dataclasses.replace(log, analysis=report)


class TestAggregateTips:
    def test_empty(self) -> None:
        assert aggregate_tips([]) == []

    def test_unanalysed_logs_skipped(self) -> None:
        assert aggregate_tips([_log("a", 1, analysed=False)]) == []

    def test_flattens_with_category(self) -> None:
        tips = aggregate_tips([_log("a", 1)])
        assert len(tips) == 7
        assert tips[0].category == "Nutrition Adjustments"
        assert all(t.source_log_id == "a" for t in tips)

    def test_duplicates_keep_newest(self) -> None:
        tips = aggregate_tips([_log("old", 1), _log("new", 5)])
        assert len(tips) == 7
        assert {t.source_log_id for t in tips} == {"new"}

    def test_newest_first(self) -> None:
        ibs_d = UserProfile(diagnoses=("IBS-D",))
        tips = aggregate_tips([_log("new", 5), _log("old", 1, profile=ibs_d)])
        assert tips[0].date == datetime(2024, 6, 5, 7, 0)
        guardrail = [t for t in tips if t.category == IBS_D_GUARDRAIL.category]
        assert len(guardrail) == 2
        assert all(t.source_log_id == "old" for t in guardrail)
        assert tips[-1].source_log_id == "old"

"""Insight extraction — recommendation items from past analyses, as tips."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from protocol_engine.models.log_entry import LogEntry


@dataclass(frozen=True)
class InsightTip:
    text: str
    category: str
    source_log_id: str
    date: datetime


def aggregate_tips(logs: Iterable[LogEntry]) -> list[InsightTip]:
    """Flatten every analysed log's recommendations into tips.

    Newest log first; when the same text appears more than once only the
    newest occurrence is kept.
    """
    tips: list[InsightTip] = []
    for log in logs:
        if log.analysis is None:
            continue
        for group in log.analysis.recommendations:
            for item in group.items:
                tips.append(InsightTip(
                    text=item,
                    category=group.category,
                    source_log_id=log.id,
                    date=log.timestamp,
                ))

    tips.sort(key=lambda t: t.date, reverse=True)

    seen: set[str] = set()
    unique: list[InsightTip] = []
    for tip in tips:
        if tip.text not in seen:
            seen.add(tip.text)
            unique.append(tip)
    return unique

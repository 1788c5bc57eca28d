"""Timeline models — the output of the protocol engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from protocol_engine.models.enums import EventStatus, EventType, RiskLevel, Theme


@dataclass(frozen=True)
class TimelineEvent:
    """One row of a generated plan.

    Details follow the "KEY: Value" convention. ``timestamp`` is the
    absolute instant used for sorting, status and grouping; the rendered
    ``time_markup`` is derived from it.
    """

    time_markup: str
    label: str
    title: str
    type: EventType
    timestamp: datetime
    details: tuple[str, ...] = field(default_factory=tuple)
    status: EventStatus = EventStatus.UPCOMING
    risk_level: RiskLevel = RiskLevel.LOW
    risk_factors: tuple[str, ...] = field(default_factory=tuple)
    contains_caffeine: bool = False


@dataclass(frozen=True)
class TimelinePlan:
    """A complete plan: banner theme, headline, and the sorted timeline.

    The plan is rebuilt wholesale on any input change, never patched.
    """

    headline: str
    theme: Theme
    timeline: tuple[TimelineEvent, ...] = field(default_factory=tuple)
    memory_context: str | None = None
    display_theme: Theme | None = None

    @property
    def banner_theme(self) -> Theme:
        """Theme to render; differs from ``theme`` only on forced overrides."""
        return self.display_theme or self.theme

    def find(self, label: str) -> TimelineEvent | None:
        """Return the first event with the given label, or None."""
        for event in self.timeline:
            if event.label == label:
                return event
        return None

    def events_of_type(self, event_type: EventType) -> tuple[TimelineEvent, ...]:
        return tuple(e for e in self.timeline if e.type == event_type)

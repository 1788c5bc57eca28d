"""PREP phase: T-14 to T-4 days extended preparation.

One training focus per day, shifting from peak volume through structural
maintenance into the taper, plus a nutrition insight every other day.
"""

from __future__ import annotations

from protocol_engine.models.enums import (
    EXTENDED_PREP_MIN_DAYS,
    MINUTES_PER_DAY,
    PEAK_VOLUME_MIN_DAYS,
    PREP_INSIGHT_DELAY_MIN,
    STRUCTURAL_MAINT_MIN_DAYS,
    EventType,
)
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext

_PEAK_VOLUME = (
    "Peak Volume Phase",
    (
        "FOCUS: This is your final heavy loading block.",
        "INTENSITY: Include some threshold intervals if feeling good.",
        "RECOVERY: Ensure sleep is prioritized to absorb this load.",
    ),
)
_STRUCTURAL = (
    "Structural Maintenance",
    (
        "FOCUS: preserve range of motion and tissue quality.",
        "ACTION: 20 min mobility/stretching routine post-run.",
        "VOLUME: Begin slight reduction in overall volume (90% of max).",
    ),
)
_TAPER = (
    "Taper Initiation",
    (
        "FOCUS: Shed fatigue while maintaining sharpness.",
        "VOLUME: Reduce volume by 40-50% from peak.",
        "INTENSITY: Keep intensity high but duration short (e.g. 4x3min @ Threshold).",
    ),
)

_PREP_INSIGHT = (
    "TIP: Now is the time to verify your race-day nutrition.",
    "ACTION: Test your intended breakfast and fueling strategy during training this week.",
    "GUT CHECK: Eliminate any supplements that have caused issues in the past.",
)


def training_focus(days_out: int) -> tuple[str, tuple[str, ...]]:
    """(title, details) of the training focus for a day *days_out* before the event."""
    if days_out > PEAK_VOLUME_MIN_DAYS:
        return _PEAK_VOLUME
    if days_out > STRUCTURAL_MAINT_MIN_DAYS:
        return _STRUCTURAL
    return _TAPER


class ExtendedPrepPhase(PhaseRule):
    """Daily training focus from the lead-time horizon down to T-4."""

    phase_id = "extended_prep"
    version = "1.0.0"
    order = 100

    def applies(self, ctx: GenerationContext) -> bool:
        return ctx.days_out >= EXTENDED_PREP_MIN_DAYS

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        events: list[TimelineEvent] = []
        for d in range(ctx.days_out, EXTENDED_PREP_MIN_DAYS - 1, -1):
            day_offset = ctx.effective_offset - d * MINUTES_PER_DAY
            label = f"T-{d} Days"
            title, details = training_focus(d)
            events.append(ctx.events.create(day_offset, label, title, EventType.TRAINING, details))

            # Every other day, to keep the calendar uncluttered
            if d % 2 == 0:
                events.append(ctx.events.create(
                    day_offset + PREP_INSIGHT_DELAY_MIN,
                    label,
                    "Prep Insight",
                    EventType.NUTRITION,
                    _PREP_INSIGHT,
                ))
        return events

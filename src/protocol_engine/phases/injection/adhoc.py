"""INJECTION phase: user-logged ad-hoc events (bowel, meal, sleep, symptom)."""

from __future__ import annotations

from protocol_engine.math.clock import minutes_between
from protocol_engine.models.enums import AdhocType, EventType
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext

# adhoc type -> (title, event type, label)
ADHOC_PRESENTATION: dict[AdhocType, tuple[str, EventType, str]] = {
    AdhocType.BOWEL: ("Bowel Movement", EventType.RECOVERY, "Health"),
    AdhocType.MEAL: ("Meal Logged", EventType.NUTRITION, "Intake"),
    AdhocType.SLEEP: ("Sleep", EventType.RECOVERY, "Rest"),
    AdhocType.SYMPTOM: ("Symptom Logged", EventType.RECOVERY, "Health"),
}
DEFAULT_PRESENTATION = ("User Log", EventType.RECOVERY, "Log")

FALLBACK_DETAIL = "Event logged by user."
IMPACT_LINE = "IMPACT: Timeline recalibrated."


class AdhocPhase(PhaseRule):
    """One event per logged entry, at its own timestamp."""

    phase_id = "adhoc"
    version = "1.0.0"
    order = 310

    def applies(self, ctx: GenerationContext) -> bool:
        return bool(ctx.user.adhoc_events)

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        events = []
        for entry in ctx.user.adhoc_events:
            title, event_type, label = ADHOC_PRESENTATION.get(entry.type, DEFAULT_PRESENTATION)
            events.append(ctx.events.create(
                minutes_between(ctx.reference_time, entry.timestamp),
                label,
                title,
                event_type,
                [entry.detail or FALLBACK_DETAIL, IMPACT_LINE],
            ))
        return events

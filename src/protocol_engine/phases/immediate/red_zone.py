"""IMMEDIATE phase: Red zone (gut tier 4) pivot to non-impact movement."""

from __future__ import annotations

from protocol_engine.models.enums import EventType, Theme
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext


class RedZonePhase(PhaseRule):
    """Swaps the session for walking and puts nutrition on gut-safety footing."""

    phase_id = "red_zone"
    version = "1.0.0"
    order = 20
    immediate = True

    def applies(self, ctx: GenerationContext) -> bool:
        return ctx.theme == Theme.RED

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        return [
            ctx.events.create(0, "Now", "Pivot: Active Recovery", EventType.TRAINING, [
                "PHYSIOLOGICAL CONTEXT: Your gut is currently in a vulnerable state (State 4). "
                "Mechanical impact from running will trigger 'runner's trots' via ischemic "
                "reperfusion injury.",
                "MODIFIED PROTOCOL: Switch to Zone 0 walking only. Keep heart rate strictly below "
                "110bpm. This promotes lymphatic drainage without diverting critical blood flow "
                "away from the intestines.",
                "DURATION LIMIT: Cap duration at 30 minutes to minimize systemic fatigue.",
            ]),
            ctx.events.create(0, "Nutrition", "Gut Safety Protocol", EventType.NUTRITION, [
                "RATIONALE: Absorption capacity is compromised. Complex carbohydrates will likely "
                "ferment and cause bloating.",
                "FLUID INTAKE: Stick to clear, isotonic fluids. Sip water or weak chamomile tea. "
                "Avoid caffeine and artificial sweeteners completely until symptoms subside.",
            ]),
        ]

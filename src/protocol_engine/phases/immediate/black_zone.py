"""IMMEDIATE phase: Black zone (gut tier 5) system reset.

A severe flare overrides everything scheduled for now: cease activity and
enter bowel rest.
"""

from __future__ import annotations

from protocol_engine.models.enums import EventType, Theme
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext


class BlackZonePhase(PhaseRule):
    """Emits the single "System Reset Protocol" event at offset 0."""

    phase_id = "black_zone"
    version = "1.0.0"
    order = 10
    immediate = True

    def applies(self, ctx: GenerationContext) -> bool:
        return ctx.theme == Theme.BLACK

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        return [
            ctx.events.create(0, "Immediate", "System Reset Protocol", EventType.RECOVERY, [
                "CRITICAL WARNING: Your biometric feedback indicates a significant inflammatory "
                "flare (State 5). High-intensity stress at this stage will likely accelerate "
                "mucosal damage and extend recovery time by days.",
                "IMMEDIATE ACTION: Cease all athletic activity immediately. Assume a supine "
                "position to reduce orthostatic stress and redirect blood flow to the splanchnic "
                "(gut) bed. Do not attempt to 'push through'.",
                "NUTRITION PROTOCOL: Enter 'Bowel Rest' mode. Consume only warm bone broth or "
                "peppermint tea to soothe smooth muscle spasms. Avoid all solids for 12-24 hours "
                "to allow the gut lining to repair.",
            ])
        ]

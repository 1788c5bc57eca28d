"""SESSION phase: re-feed an hour after the finish.

Overnight finishes prioritise sleep over caloric timing; daytime finishes
get a solid gut-repair meal.
"""

from __future__ import annotations

from protocol_engine.math.clock import is_sleep_time
from protocol_engine.models.enums import REFEED_DELAY_MIN, EventType
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext
from protocol_engine.phases.session.finish import finish_offset

_MUCOSAL_REPAIR = (
    "OBJECTIVE: Repair the gut lining and replenish glycogen stores.",
    "INTAKE: Solid, balanced meal. White Rice, Chicken, Bone Broth (Collagen).",
    "RESTRICTION: Avoid raw fiber (salads) or alcohol for 4 hours, as splanchnic blood flow is "
    "still normalizing. The gut remains permeable.",
)


class RefeedPhase(PhaseRule):
    phase_id = "refeed"
    version = "1.0.0"
    order = 240

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        offset = finish_offset(ctx) + REFEED_DELAY_MIN

        if is_sleep_time(ctx.reference_time, offset):
            return [
                ctx.events.create(offset, "Re-Feed", "Overnight Recovery", EventType.RECOVERY, [
                    "PRIORITY: Sleep architecture > Caloric timing.",
                    f"INTAKE: If hungry, {ctx.swaps.casein} is optimal. Avoid heavy meals that "
                    "increase core body temperature.",
                    "ENVIRONMENT: Dark room, cool temperature (18°C) to facilitate deep sleep.",
                ])
            ]
        return [
            ctx.events.create(offset, "Re-Feed", "Mucosal Repair", EventType.NUTRITION, _MUCOSAL_REPAIR)
        ]

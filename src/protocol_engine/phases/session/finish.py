"""SESSION phase: the finish line, with immediate refeed and cooling."""

from __future__ import annotations

from protocol_engine.math.dosing import refeed_carbs, refeed_protein
from protocol_engine.models.enums import EventType
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext


def finish_offset(ctx: GenerationContext) -> int:
    """Offset of the session's end: start plus the (override or bucket) duration."""
    return ctx.effective_offset + ctx.session.duration_minutes


class FinishPhase(PhaseRule):
    phase_id = "finish"
    version = "1.0.0"
    order = 230

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        weight = ctx.user.weight_kg
        protein = refeed_protein(weight)
        carbs = refeed_carbs(weight)

        return [
            ctx.events.create(finish_offset(ctx), "Finish Line", "The Inflammatory Tail", EventType.RECOVERY, [
                "PHYSIOLOGY: Post-exercise, your body enters an 'open window' of immune "
                "suppression and inflammation. Rapid nutrient delivery is key to closing this window.",
                f"IMMEDIATE INTAKE: {protein}g {ctx.swaps.protein} + {carbs}g Fast Carbs (e.g., "
                f"Haribo, {ctx.swaps.toast}). Do not wait for the adrenaline to settle.",
                "THERMOREGULATION: Active cooling (cold shower/ice vest) can help reduce systemic "
                "inflammation (IL-6 cytokines).",
            ])
        ]

"""PREP phase: T-72h volume taper and carbohydrate loading."""

from __future__ import annotations

from protocol_engine.math.clock import is_same_day
from protocol_engine.math.dosing import carb_loading_range
from protocol_engine.models.enums import CARB_LOADING_DELAY_MIN, T72H_OFFSET_MIN, EventType
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext
from protocol_engine.rules.classifier import is_compromised


def suppressed_for_today(ctx: GenerationContext, anchor_offset: int) -> bool:
    """Standard-day advice is dropped for today when the gut is compromised."""
    return is_compromised(ctx.theme) and is_same_day(ctx.reference_time, anchor_offset)


class T72hPhase(PhaseRule):
    """Day -3: start tapering volume and begin loading carbohydrate."""

    phase_id = "t72h"
    version = "1.0.0"
    order = 110

    def applies(self, ctx: GenerationContext) -> bool:
        return ctx.days_out >= 3

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        anchor = ctx.effective_offset - T72H_OFFSET_MIN
        if suppressed_for_today(ctx, anchor):
            return []

        low, high = carb_loading_range(ctx.user.weight_kg)
        return [
            ctx.events.create(anchor, "Day -3 Focus", "General Prep & Volume Taper", EventType.TRAINING, [
                "TRAINING VOLUME: Volume should decrease by 20-30% starting today to allow "
                "glycogen supercompensation.",
                "INTENSITY CHECK: Maintain some race-pace intervals to keep neurological priming, "
                "but reduce overall load to prevent systemic fatigue.",
                "GUT PREP: Eliminate high-FODMAP vegetables (onions, garlic, cauliflower) starting "
                "now. These foods ferment in the lower bowel and can cause gas/bloating on race day.",
            ]),
            ctx.events.create(
                anchor + CARB_LOADING_DELAY_MIN,
                "Day -3 Nutrition",
                "Carbohydrate Loading Initiation",
                EventType.NUTRITION,
                [
                    "NUTRITIONAL OBJECTIVE: Shift macronutrient ratio towards carbohydrates.",
                    f"CARB TARGET: Aim for {low}g - {high}g of Carbohydrates total today to begin "
                    "saturating muscle stores.",
                    "HYDRATION STATUS: Increase fluid intake. Urine should be pale yellow.",
                ],
            ),
        ]

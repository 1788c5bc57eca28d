"""PREP phase: T-24h sharpening day with lighter meals and an early dinner."""

from __future__ import annotations

from protocol_engine.math.clock import cap_to_dinner_time
from protocol_engine.models.enums import (
    DINNER_DELAY_MIN,
    T24H_DINNER_RICE_REDUCTION_G,
    T24H_LUNCH_DELAY_MIN,
    T24H_OFFSET_MIN,
    EventType,
)
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext


class T24hPhase(PhaseRule):
    """Day -1: morning, the anchor lunch, and a small early dinner."""

    phase_id = "t24h"
    version = "1.0.0"
    order = 130

    def applies(self, ctx: GenerationContext) -> bool:
        return ctx.days_out >= 1

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        anchor = ctx.effective_offset - T24H_OFFSET_MIN
        p = ctx.portions
        swaps = ctx.swaps

        return [
            ctx.events.create(anchor, "T-24h Morning", "Sharpening Phase", EventType.NUTRITION, [
                f"HYDRATION: {p.water_std_ml}ml Water + Electrolytes on waking.",
                f"BREAKFAST (LIGHTER): 3 Eggs + 1-1.5 Slices {swaps.toast} + 1 tsp Honey. Reduced "
                "volume compared to yesterday to prevent heaviness.",
                "MOVEMENT: 20-30 min walk or mobility. Finish relaxed, not stimulated. Save the legs.",
            ]),
            ctx.events.create(anchor + T24H_LUNCH_DELAY_MIN, "T-24h Lunch", "The Anchor Meal", EventType.NUTRITION, [
                "CONTEXT: This meal carries you into tomorrow. It is your primary fuel source for "
                "the event.",
                f"PROTEIN SOURCE: {p.meat_g}g Lean Protein (Chicken/Turkey/Fish). Avoid red meat "
                "if digestion is slow.",
                f"CARB SOURCE: {p.rice_g}g White Rice or {swaps.pasta} (Cooked). Load up here.",
                "FAT SOURCE: 1 tbsp Olive Oil + Salt well.",
            ]),
            ctx.events.create(
                cap_to_dinner_time(ctx.reference_time, anchor + DINNER_DELAY_MIN),
                "T-24h Dinner",
                "Early & Small",
                EventType.NUTRITION,
                [
                    "TIMING: Eat earlier than usual to ensure an empty stomach and lower core "
                    "temperature for sleep.",
                    f"PROTEIN SOURCE: {p.meat_small_g}g Protein.",
                    f"CARB SOURCE: {p.rice_g - T24H_DINNER_RICE_REDUCTION_G}g White Rice or "
                    "Potatoes. Tapering off slightly.",
                    "FAT SOURCE: 1 tsp Olive Oil/Butter. Kept low to speed gastric emptying.",
                    "POST-DINNER ACTIVITY: 10-15 min easy walk to aid gastric emptying and reduce "
                    "reflux risk.",
                ],
            ),
        ]

"""PREP phase: T-48h foundation day.

Wake timing and hydration, then three low-residue meals with weight-scaled
portions and intolerance-aware ingredients. Dinner is capped to 19:00.
"""

from __future__ import annotations

from protocol_engine.math.clock import cap_to_dinner_time
from protocol_engine.models.enums import (
    BREAKFAST_DELAY_MIN,
    DINNER_DELAY_MIN,
    T48H_LUNCH_DELAY_MIN,
    T48H_OFFSET_MIN,
    EventType,
)
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext
from protocol_engine.phases.prep.t72h import suppressed_for_today

CAFFEINE_LINE = "CAFFEINE: Normal amount. Cut off strictly after 1:00 PM."


class T48hPhase(PhaseRule):
    """Day -2: wake, breakfast, lunch, dinner."""

    phase_id = "t48h"
    version = "1.0.0"
    order = 120

    def applies(self, ctx: GenerationContext) -> bool:
        return ctx.days_out >= 2

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        anchor = ctx.effective_offset - T48H_OFFSET_MIN
        if suppressed_for_today(ctx, anchor):
            return []

        p = ctx.portions
        swaps = ctx.swaps

        breakfast = [
            "GOAL: Glycogen refill + protein without fiber overload.",
            f"OPTION A: 3 Eggs + 2 Egg Whites + 2 Slices {swaps.toast} + 1 tsp Butter.",
            f"OPTION B: 300g {swaps.yogurt} + 1.5 tbsp Honey + 1 Small Banana.",
        ]
        if swaps.allows_caffeine:
            breakfast.append(CAFFEINE_LINE)

        return [
            ctx.events.create(anchor, "T-48h Morning", "Foundation Phase: Wake & Hydrate", EventType.HYDRATION, [
                "WAKE TIMING: Within ±30 minutes of target wake time for event day to sync your "
                "circadian rhythm.",
                "LIGHT EXPOSURE: View morning sunlight for 5-10 minutes immediately upon waking. "
                "This anchors your circadian cortisol pulse, which regulates digestion and bowel "
                "motility.",
                f"HYDRATION: {p.water_std_ml}ml Water + ~{p.wake_sodium_mg}mg Sodium (approx 1/4 "
                "tsp sea salt or electrolytes). Start the day in a eu-hydrated state.",
            ]),
            ctx.events.create(anchor + BREAKFAST_DELAY_MIN, "T-48h Breakfast", "Glycogen Refill", EventType.NUTRITION, breakfast),
            ctx.events.create(anchor + T48H_LUNCH_DELAY_MIN, "T-48h Lunch", "The 'Boring' Anchor Meal", EventType.NUTRITION, [
                "MEAL OBJECTIVE: Keep glycogen rising while keeping the gut calm.",
                f"PROTEIN SOURCE: {p.meat_g}g Grilled Chicken Breast. Simple, low fat.",
                f"CARB SOURCE: {p.rice_g}g White Rice (Cooked Weight). Low fiber, high absorption.",
                "FAT SOURCE: 1 tbsp Olive Oil.",
                "VEGETABLE LIMIT: Optional 1/2 cup cooked carrots/zucchini. NO raw food (salads) "
                "from this point on to minimize gut residue.",
            ]),
            ctx.events.create(
                cap_to_dinner_time(ctx.reference_time, anchor + DINNER_DELAY_MIN),
                "T-48h Dinner",
                "Early & Calm",
                EventType.NUTRITION,
                [
                    f"PROTEIN SOURCE: {p.meat_small_g}g Salmon or Lean Beef.",
                    f"CARB SOURCE: {p.potatoes_g}g Potatoes (Boiled/Roasted - Peeling recommended "
                    "to remove insoluble fiber).",
                    "FAT SOURCE: 1 tbsp Olive Oil or Butter. Salt generously to aid fluid retention.",
                    "GOLDEN RULE: No alcohol. No dessert experiments. Sleep is the priority.",
                ],
            ),
        ]

"""SESSION phase: pre-session fueling (-2h meal, -60m pre-load, last-minute prime).

Which events appear depends on how far away the start is: two hours or
more gets the main meal (or sleep advice if it would fall overnight), an
hour or more gets the pre-load, and anything between 15 and 60 minutes
gets only a mouth-rinse prime.
"""

from __future__ import annotations

from protocol_engine.math.clock import is_sleep_time
from protocol_engine.models.enums import (
    LAST_MINUTE_PRIME_MIN,
    PRE_LOAD_LEAD_MIN,
    PRIMARY_MEAL_LEAD_MIN,
    EventType,
    Theme,
)
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext

_SLEEP_HYGIENE = (
    "CIRCADIAN BIOLOGY: Your body is currently prioritizing melatonin. Forcing digestion now "
    "effectively gives you 'metabolic jetlag', disrupting your core temperature rhythm.",
    "SLEEP PRIORITY: Do NOT wake up to eat. Sleep is the ultimate performance enhancer. If you "
    "naturally wake up, sip a small amount of liquid carbs, but prioritize rest.",
)
_PRIMARY_MEAL = (
    "MEAL OBJECTIVE: Top up muscle glycogen with minimal digestive stress.",
    "INTAKE: White Rice + Lean Protein (Chicken/Tofu). Low fat, low fiber. Chew thoroughly.",
    "BLOOD CHEMISTRY: Salt food liberally to aid water retention and prevent hyponatremia "
    "during the sweat session.",
)
_LOW_OSMOLARITY = (
    "SENSITIVITY CONTEXT: Yellow Zone indicates mild gut sensitivity. We need fuel that is "
    "easily absorbed to prevent sloshing.",
    "LIQUID INTAKE: Use Liquid Carbs (Maltodextrin/Cyclic Dextrin) rather than solids. This "
    "bypasses mechanical digestion.",
    "HYDRATION STRATEGY: Sip hypotonic fluids to encourage rapid gastric emptying.",
)
_LAST_MINUTE_PRIME = (
    "TACTIC: There isn't enough time for digestion, but we can use the 'Mouth Rinse' effect.",
    "ACTION: Rinse mouth with a carb solution or consume a small hydrogel. This tricks the "
    "brain directly into perceiving fuel availability, reducing perceived exertion.",
)


class PreSessionPhase(PhaseRule):
    """Fueling before the start, scaled to the time remaining."""

    phase_id = "pre_session"
    version = "1.0.0"
    order = 200

    def applies(self, ctx: GenerationContext) -> bool:
        return ctx.effective_offset > LAST_MINUTE_PRIME_MIN

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        start = ctx.effective_offset
        events: list[TimelineEvent] = []

        if start >= PRIMARY_MEAL_LEAD_MIN:
            meal_offset = start - PRIMARY_MEAL_LEAD_MIN
            if is_sleep_time(ctx.reference_time, meal_offset):
                events.append(ctx.events.create(
                    meal_offset, "Fueling (-2h)", "Sleep Hygiene Protocol", EventType.RECOVERY, _SLEEP_HYGIENE
                ))
            else:
                events.append(ctx.events.create(
                    meal_offset, "Fueling (-2h)", "Primary Fueling Meal", EventType.NUTRITION, _PRIMARY_MEAL
                ))

        if start >= PRE_LOAD_LEAD_MIN:
            events.append(self._pre_load(ctx, start - PRE_LOAD_LEAD_MIN))
        else:
            events.append(ctx.events.create(
                0, "Immediate", "Last Minute Prime", EventType.NUTRITION, _LAST_MINUTE_PRIME
            ))

        return events

    @staticmethod
    def _pre_load(ctx: GenerationContext, offset: int) -> TimelineEvent:
        if ctx.theme == Theme.YELLOW:
            return ctx.events.create(
                offset, "Pre-Load (-60m)", "Low Osmolarity Fueling", EventType.NUTRITION, _LOW_OSMOLARITY
            )
        return ctx.events.create(offset, "Pre-Load (-60m)", "Glycogen Top-Up", EventType.NUTRITION, [
            "PROTOCOL: The 'Top-Up'. A small complex carbohydrate snack to maintain blood glucose "
            "and liver glycogen.",
            ctx.swaps.snack_line,
            f"HYDRATION: Pre-load with {ctx.portions.water_std_ml}ml fluid + 500mg Sodium to "
            "expand plasma volume.",
        ])

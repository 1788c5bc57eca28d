"""SESSION phase: intra-workout fueling chemistry.

Short sessions run on liver glycogen alone. Longer ones get an hourly
carbohydrate target and a carbohydrate source chosen for the gut: glucose
or maltodextrin only when fructose is not tolerated, cyclic dextrin in the
yellow zone, and a 1:0.8 glucose:fructose mix otherwise.

Reference:
    Jeukendrup (2014). A step towards personalized sports nutrition:
    carbohydrate intake during exercise. Sports Med 44(Suppl 1):S25-S33.
"""

from __future__ import annotations

from protocol_engine.math.dosing import format_weight, intra_workout_carbs
from protocol_engine.models.enums import INTRA_WORKOUT_DELAY_MIN, DurationBucket, EventType, Theme
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext

NO_FRUCTOSE_LINE = (
    "INTOLERANCE MODE (No Fructose): Use pure Glucose or Maltodextrin based fuels only. AVOID "
    "standard 1:0.8 mixes as they contain fructose."
)
SENSITIVITY_LINE = (
    "SENSITIVITY MODE: Stick to Cyclic Dextrin (HBCD). Its low osmolarity clears the stomach "
    "rapidly, reducing risk of nausea."
)
STANDARD_MIX_LINE = "STANDARD MODE: Use a 1:0.8 Glucose:Fructose ratio to maximize absorption pathways."

_SHORT_SESSION = (
    "STRATEGY: Duration <60m requires no exogenous fueling. Rely on liver glycogen.",
    "ACTION: Drink water to thirst. Use a mouth rinse if you feel central nervous system fatigue.",
)


class IntraWorkoutPhase(PhaseRule):
    """One hydration/fueling event 15 minutes after the start."""

    phase_id = "intra_workout"
    version = "1.0.0"
    order = 220

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        if ctx.session.duration == DurationBucket.SHORT:
            details: tuple[str, ...] | list[str] = _SHORT_SESSION
        else:
            details = self._fueling_strategy(ctx)

        return [
            ctx.events.create(
                ctx.effective_offset + INTRA_WORKOUT_DELAY_MIN,
                "Intra-Workout",
                "Fueling Chemistry",
                EventType.HYDRATION,
                details,
            )
        ]

    @staticmethod
    def _fueling_strategy(ctx: GenerationContext) -> list[str]:
        weight = ctx.user.weight_kg
        carbs_per_hour = intra_workout_carbs(weight, ctx.session.intensity)
        lines = [
            "FUELING STRATEGY: The gut is a trainable organ. We need to saturate glucose "
            "transporters (SGLT1/GLUT5) to maintain energy flux.",
            f"TARGET: Aim for {carbs_per_hour}g Carbs/hr based on your {format_weight(weight)}kg bodyweight.",
        ]

        if ctx.swaps.fructose_free:
            lines.append(NO_FRUCTOSE_LINE)
        elif ctx.theme == Theme.YELLOW:
            lines.append(SENSITIVITY_LINE)
        else:
            lines.append(STANDARD_MIX_LINE)

        lines.append("ELECTROLYTES: 500mg Sodium/L of fluid to replace sweat losses.")
        return lines

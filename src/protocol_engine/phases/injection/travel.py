"""INJECTION phase: travel around the event.

Departure and arrival bracket the trip. Flights add an hourly cabin
hydration event; every mode gets a movement break every second hour.
"""

from __future__ import annotations

from protocol_engine.math.clock import minutes_between
from protocol_engine.models.enums import (
    TRAVEL_MOVEMENT_DELAY_MIN,
    TRAVEL_MOVEMENT_EVERY_HOURS,
    EventType,
    TravelMode,
)
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext

FLIGHT_DEPARTURE_TITLE = "Depart: Flight"
# Train and other ground modes share the drive wording
GROUND_DEPARTURE_TITLE = "Depart: Drive"


class TravelPhase(PhaseRule):
    phase_id = "travel"
    version = "1.0.0"
    order = 300

    def applies(self, ctx: GenerationContext) -> bool:
        travel = ctx.session.travel
        return bool(
            travel is not None
            and travel.is_traveling
            and travel.start_time is not None
            and travel.duration_minutes
        )

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        travel = ctx.session.travel
        if travel is None or travel.start_time is None or not travel.duration_minutes:
            return []
        start = minutes_between(ctx.reference_time, travel.start_time)
        mode = TravelMode(travel.mode)
        departure_title = FLIGHT_DEPARTURE_TITLE if mode == TravelMode.FLIGHT else GROUND_DEPARTURE_TITLE

        events = [
            ctx.events.create(start, "Travel", departure_title, EventType.RECOVERY, [
                f"TRAVEL MODE: {mode.value.upper()}",
                "STATUS UPDATE: Travel stress initiated. Circadian rhythm monitoring active.",
            ]),
            ctx.events.create(start + travel.duration_minutes, "Travel", "Arrival", EventType.RECOVERY, [
                "STATUS UPDATE: Travel complete. Environmental acclimation phase begins.",
                "RECOVERY ACTION: 10-min walk to reset hips/spine and stimulate lymphatic drainage.",
            ]),
        ]

        hours = travel.duration_minutes // 60
        for hour in range(1, hours + 1):
            offset = start + hour * 60
            if mode == TravelMode.FLIGHT:
                events.append(ctx.events.create(offset, "Travel Fuel", "Cabin Hydration", EventType.HYDRATION, [
                    "CABIN ENVIRONMENT: Cabin air is ~15% humidity (Desert dry), accelerating dehydration.",
                    "HYDRATION PROTOCOL: 250-500ml Water + Electrolytes to maintain blood plasma volume.",
                ]))
            if hour % TRAVEL_MOVEMENT_EVERY_HOURS == 0:
                events.append(ctx.events.create(
                    offset + TRAVEL_MOVEMENT_DELAY_MIN, "Mobility", "Travel Movement", EventType.TRAINING, [
                        "CIRCULATION RISK: Blood pooling in lower limbs increases thrombotic risk and "
                        "perceived fatigue.",
                        "MOVEMENT ACTION: Calf pumps, glute squeezes, or walk the aisle to activate "
                        "muscle pumps.",
                    ],
                ))

        return events

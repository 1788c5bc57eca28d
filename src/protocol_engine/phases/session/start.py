"""SESSION phase: the start event itself."""

from __future__ import annotations

from protocol_engine.models.enums import SAFETY_VALVE_GUT_THRESHOLD, EventType, Intensity
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.base import PhaseRule
from protocol_engine.phases.context import GenerationContext


class StartPhase(PhaseRule):
    """Execution guidance at the start offset, always emitted."""

    phase_id = "start"
    version = "1.0.0"
    order = 210

    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        session = ctx.session
        if session.intensity == Intensity.MAX_EFFORT:
            title = "High-Intensity Execution"
            execution = (
                "EXECUTION: Warm up for 15 mins. Then target Threshold/VO2 max intervals. Ensure "
                "heart rate recovers between sets to flush lactate."
            )
        else:
            title = "Aerobic Maintenance"
            execution = (
                "EXECUTION: Maintain a steady output in Zone 2. You should technically be able to "
                "hold a conversation, facilitating fat oxidation."
            )

        if session.gut_scale < SAFETY_VALVE_GUT_THRESHOLD:
            gut_line = (
                "SAFETY CONSTRAINT: IBD Safety Valve engaged. If abdominal pain exceeds 4/10, "
                "abort the session immediately to prevent flare induction."
            )
        else:
            gut_line = "GUT STATUS: Stable. You are cleared to push hard."

        return [
            ctx.events.create(ctx.effective_offset, "Start Time", title, EventType.TRAINING, [execution, gut_line])
        ]

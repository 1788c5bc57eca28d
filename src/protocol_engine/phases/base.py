"""Abstract base class for all timeline phase routines."""

from __future__ import annotations

from abc import ABC, abstractmethod

from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.phases.context import GenerationContext


class PhaseRule(ABC):
    """Base class for one phase of plan generation.

    Each phase encapsulates one slice of the editorial rule table (the
    T-48h meals, the intra-workout fueling, travel injection, ...). Phases
    are discovered automatically by the PhaseRegistry and run by the
    ProtocolEngine in ascending ``order``; events with equal timestamps
    keep that emission order in the final plan.

    Subclasses must define:
        phase_id: unique identifier (e.g. "t48h")
        version: semantic version string
        order: position in the fixed generation order
        generate(): the phase's event emission

    ``immediate`` phases are the red/black zone responses that still run
    when the engine returns early for a same-day crisis.
    """

    phase_id: str
    version: str
    order: int
    immediate: bool = False

    def applies(self, ctx: GenerationContext) -> bool:
        """Whether this phase has anything to do for the request."""
        return True

    @abstractmethod
    def generate(self, ctx: GenerationContext) -> list[TimelineEvent]:
        """Emit this phase's events, in display order for equal timestamps."""
        ...

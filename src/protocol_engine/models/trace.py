"""Generation trace — audit trail of which phases ran during a plan build."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto

from protocol_engine.models.enums import Theme


class PhaseStatus(IntEnum):
    """Whether a phase emitted events, emitted nothing, or did not apply."""

    FIRED = auto()
    SKIPPED = auto()
    NOT_APPLICABLE = auto()


@dataclass(frozen=True)
class PhaseResult:
    """Record of a single phase's run during an engine call."""

    phase_id: str
    status: PhaseStatus
    event_count: int = 0
    explanation: str = ""


@dataclass(frozen=True)
class GenerationTrace:
    """Every phase's outcome plus the filtering summary for one plan build."""

    theme: Theme
    phase_results: tuple[PhaseResult, ...] = field(default_factory=tuple)
    early_return: bool = False
    dropped_stale: int = 0

    def result_for(self, phase_id: str) -> PhaseResult | None:
        for result in self.phase_results:
            if result.phase_id == phase_id:
                return result
        return None

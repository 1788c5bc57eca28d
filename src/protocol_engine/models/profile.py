"""User profile — physical and medical attributes used to personalise a plan."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from protocol_engine.models.enums import (
    DEFAULT_HEIGHT_CM,
    DEFAULT_WEIGHT_KG,
    AdhocType,
    Gender,
    Severity,
)


@dataclass(frozen=True)
class Intolerance:
    """A food intolerance. Only a handful of names change generated content."""

    name: str
    severity: Severity = Severity.MODERATE


@dataclass(frozen=True)
class AdhocEvent:
    """A user-entered event (bowel movement, meal, ...) merged into the plan as-is."""

    id: str
    type: AdhocType
    timestamp: datetime
    detail: str | None = None


@dataclass(frozen=True)
class UserProfile:
    """Immutable snapshot of the athlete's profile.

    Edited by the user in settings; the engine only reads it.
    """

    weight_kg: float = DEFAULT_WEIGHT_KG
    gender: Gender = Gender.MALE
    height_cm: float | None = DEFAULT_HEIGHT_CM
    name: str | None = None
    body_fat_pct: float | None = None

    intolerances: tuple[Intolerance, ...] = field(default_factory=tuple)

    # Medical context
    diagnoses: tuple[str, ...] = field(default_factory=tuple)
    medications: tuple[str, ...] = field(default_factory=tuple)
    supplements: tuple[str, ...] = field(default_factory=tuple)

    adhoc_events: tuple[AdhocEvent, ...] = field(default_factory=tuple)

    @classmethod
    def default(cls) -> UserProfile:
        """70 kg male, 175 cm, no intolerances."""
        return cls()

    def has_intolerance(self, name: str) -> bool:
        """Exact, case-sensitive match on intolerance name."""
        return any(i.name == name for i in self.intolerances)

    def has_diagnosis(self, marker: str) -> bool:
        """Substring match, e.g. "IBS-D" matches "IBS-D (2019)"."""
        return any(marker in d for d in self.diagnoses)

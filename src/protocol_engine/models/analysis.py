"""Coach analysis report — post-hoc scoring of a completed session."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Deviation:
    title: str
    details: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Interpretation:
    primary: str
    signals: tuple[str, ...] = field(default_factory=tuple)
    contributors: tuple[str, ...] = field(default_factory=tuple)
    negatives: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RecommendationGroup:
    category: str
    items: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ConfidenceBlock:
    stability: str
    fueling_risk: str
    change_need: str


@dataclass(frozen=True)
class AnalysisReport:
    """Fixed-shape report produced by the coach analysis generator."""

    readiness: float
    outcome: str
    adherence: int
    risk_level: str
    deviations: tuple[Deviation, ...]
    interpretation: Interpretation
    recommendations: tuple[RecommendationGroup, ...]
    confidence: ConfidenceBlock
    coach_note: str

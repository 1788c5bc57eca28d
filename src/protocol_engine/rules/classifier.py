"""Risk and state classifier.

Maps the subjective gut score onto a severity tier and a go/no-go theme,
and grades each generated event's risk.
"""

from __future__ import annotations

from protocol_engine.models.enums import (
    GUT_TIER_1_MIN,
    GUT_TIER_2_MIN,
    GUT_TIER_3_MIN,
    GUT_TIER_4_MIN,
    HIGH_RISK_GUT_THRESHOLD,
    IBS_D_MARKER,
    EventType,
    GutTier,
    Intensity,
    RiskLevel,
    Theme,
)
from protocol_engine.models.profile import UserProfile

CAFFEINE_IBS_D_FACTOR = "Caffeine + IBS-D"

_THEME_BY_TIER: dict[GutTier, Theme] = {
    GutTier.TIER_1: Theme.GREEN,
    GutTier.TIER_2: Theme.GREEN,
    GutTier.TIER_3: Theme.YELLOW,
    GutTier.TIER_4: Theme.RED,
    GutTier.TIER_5: Theme.BLACK,
}

COMPROMISED_THEMES = frozenset({Theme.RED, Theme.BLACK})


def classify_gut_tier(gut_scale: int) -> GutTier:
    """Tier 1 (gut 9-10) through tier 5 (gut 1-2)."""
    if gut_scale >= GUT_TIER_1_MIN:
        return GutTier.TIER_1
    if gut_scale >= GUT_TIER_2_MIN:
        return GutTier.TIER_2
    if gut_scale >= GUT_TIER_3_MIN:
        return GutTier.TIER_3
    if gut_scale >= GUT_TIER_4_MIN:
        return GutTier.TIER_4
    return GutTier.TIER_5


def theme_for_tier(tier: GutTier) -> Theme:
    return _THEME_BY_TIER[tier]


def classify_theme(gut_scale: int) -> Theme:
    """Go/no-go theme as a pure step function of the gut score."""
    return theme_for_tier(classify_gut_tier(gut_scale))


def is_compromised(theme: Theme) -> bool:
    """Red and black zones suppress standard same-day advice."""
    return theme in COMPROMISED_THEMES


def headline_for(tier: GutTier) -> str:
    """Banner message for a gut tier."""
    theme = theme_for_tier(tier)
    if theme == Theme.GREEN:
        return f"Green Zone (State {int(tier)}). Protocol: Performance Optimization."
    if theme == Theme.YELLOW:
        return "Yellow Zone. Protocol: Damage Limitation. Prioritizing low residue inputs."
    if theme == Theme.RED:
        return "Red Zone. Protocol: Non-Impact Movement Only."
    return "Black Zone. Protocol: Immediate Cessation."


def assess_event_risk(
    event_type: EventType,
    intensity: Intensity,
    gut_scale: int,
    contains_caffeine: bool,
    profile: UserProfile | None,
) -> tuple[RiskLevel, tuple[str, ...]]:
    """Grade one event's risk.

    Training events at max effort are at least medium risk, high when the
    gut score is also below 6. Caffeine-flagged events are forced to
    medium for athletes with an IBS-D diagnosis, with an explanatory
    factor.

    Returns:
        (risk level, risk factor tags)
    """
    risk = RiskLevel.LOW
    factors: list[str] = []

    if event_type == EventType.TRAINING and intensity == Intensity.MAX_EFFORT:
        risk = RiskLevel.MEDIUM
        if gut_scale < HIGH_RISK_GUT_THRESHOLD:
            risk = RiskLevel.HIGH

    if contains_caffeine and profile is not None and profile.has_diagnosis(IBS_D_MARKER):
        risk = RiskLevel.MEDIUM
        factors.append(CAFFEINE_IBS_D_FACTOR)

    return risk, tuple(factors)

"""Coach analysis of a completed session.

A keyword/threshold heuristic over the log's gut score, the athlete's
rating and free-text notes, plus the profile's IBS-D/IBS-C diagnosis
flags. The report always has the same shape; only the selected texts and
scores vary.
"""

from __future__ import annotations

import math
import random

from protocol_engine.models.analysis import (
    AnalysisReport,
    ConfidenceBlock,
    Deviation,
    Interpretation,
    RecommendationGroup,
)
from protocol_engine.models.enums import IBS_C_MARKER, IBS_D_MARKER
from protocol_engine.models.log_entry import LogEntry
from protocol_engine.models.profile import UserProfile

BASE_READINESS = 7.5
DEFAULT_GUT_SCALE = 8
DEFAULT_RATING = 3
MAX_READINESS = 10.0

# Adherence is reported in [85, 98]
ADHERENCE_MIN = 85
ADHERENCE_SPREAD = 14

CARB_SOURCE_KEYWORDS = ("potato", "rice", "bread")

COACH_NOTES = (
    "Protocol is fundamentally sound. Minor GI signal likely from carbohydrate source. "
    "Maintain structure.",
    "Excellent execution. The increase in sodium paid off. Let's repeat this exact setup next time.",
    "Good resilience. The gut distress was managed well. Next time, let's simplify the T-4h "
    "meal to just liquid.",
)

_MEAL_SWAP = Deviation("Meal swap detection", (
    "Dinner T-24h: Detected carbohydrate source variance.",
    "Outcome: Neutral performance impact.",
    "GI response: Slightly increased stool bulk next morning.",
))
_MACRO_TIMING = Deviation("Macronutrient Timing", (
    "Pre-event meal timing was optimal.",
    "Hydration bolus T-60min was slightly aggressive.",
    "Result: Mild urge frequency increase.",
))
_GUT_SIGNAL = Deviation("Gut Signal", (
    "Timing: Mid-event.",
    "Sensation: Bloating > 4/10.",
    "Resolution: Required pace reduction.",
))
_BOWEL_SIGNAL = Deviation("Bowel movement signal", (
    "Timing: Pre-event morning.",
    "Bristol scale: Type 4 (Optimal).",
    "Urgency: None.",
    "Discomfort: Low.",
))

_BASE_RECOMMENDATIONS = (
    RecommendationGroup("Nutrition Adjustments", (
        "Prefer white rice over potatoes in final 24h pre-event window.",
        "Keep total evening carb load ≤250 g cooked.",
        "Maintain current protein and fat levels.",
    )),
    RecommendationGroup("Hydration Adjustments", (
        "Reduce pre-wake sodium load from ~1000 mg → ~700 mg.",
        "Delay first electrolyte bolus until after initial bowel movement.",
    )),
    RecommendationGroup("Timing Tweaks", (
        "Advance dinner T-24h by additional 30–45 minutes.",
        "Add 5–10 minute walk post-dinner consistently.",
    )),
)
IBS_D_GUARDRAIL = RecommendationGroup("IBS-D Guardrail", (
    "Risk Flag: Motility is naturally high. Reduce caffeine intake T-4h significantly.",
    "Adjustment: Increase sodium in post-run rehydration by 20% to account for potentially "
    "looser stool output.",
))
IBS_C_GUARDRAIL = RecommendationGroup("IBS-C Guardrail", (
    "Risk Flag: Incomplete evacuation detected. Add 300mg Magnesium Citrate to T-12h protocol.",
    "Adjustment: Ensure T-24h fiber intake comes from soluble sources (Kiwi, Oats) rather "
    "than insoluble.",
))
IBS_D_CONTRIBUTOR = "Baseline motility (IBS-D) likely amplified by pre-race nerves."


def readiness_score(gut_scale: int, rating: int, ibs_d: bool) -> float:
    """7.5 + gut*0.2 - 2 + rating*0.1, minus 1 for IBS-D with gut < 5; one decimal, max 10."""
    score = BASE_READINESS + gut_scale * 0.2 - 2 + rating * 0.1
    if ibs_d and gut_scale < 5:
        score -= 1
    return min(MAX_READINESS, math.floor(score * 10 + 0.5) / 10)


def outcome_for(readiness: float) -> str:
    if readiness > 8.5:
        return "High energy, stable focus, mild transient GI deviation"
    if readiness > 6:
        return "Moderate performance, noted fatigue in final quartile."
    return "Sub-optimal readiness, likely driven by residual inflammation."


def generate_analysis(
    log: LogEntry,
    profile: UserProfile | None = None,
    rng: random.Random | None = None,
) -> AnalysisReport:
    """Score a completed session and produce the coach report.

    Args:
        log: The completed log entry, usually with feedback attached.
        profile: Supplies the IBS-D/IBS-C flags. None means no diagnoses.
        rng: Source for the adherence figure; pass a seeded Random for
             reproducible reports.
    """
    rng = rng or random.Random()
    ibs_d = profile is not None and profile.has_diagnosis(IBS_D_MARKER)
    ibs_c = profile is not None and profile.has_diagnosis(IBS_C_MARKER)

    # Only readiness substitutes a default; the text thresholds see the raw score
    raw_gut = log.gut_scale
    gut = raw_gut or DEFAULT_GUT_SCALE
    feedback = log.feedback
    rating = (feedback.rating if feedback else 0) or DEFAULT_RATING
    notes = (feedback.notes if feedback else "").lower()

    readiness = readiness_score(gut, rating, ibs_d)
    adherence = ADHERENCE_MIN + rng.randrange(ADHERENCE_SPREAD)

    deviations = (
        _MEAL_SWAP if any(word in notes for word in CARB_SOURCE_KEYWORDS) else _MACRO_TIMING,
        _GUT_SIGNAL if raw_gut is not None and raw_gut < 6 else _BOWEL_SIGNAL,
    )

    contributors = [
        "Slightly higher resistant starch from dietary choices.",
        "Combined with pre-event electrolyte intake increasing gut motility.",
    ]
    recommendations = list(_BASE_RECOMMENDATIONS)
    if ibs_d:
        recommendations.append(IBS_D_GUARDRAIL)
        contributors.append(IBS_D_CONTRIBUTOR)
    if ibs_c:
        recommendations.append(IBS_C_GUARDRAIL)

    interpretation = Interpretation(
        primary=(
            "Gut deviation was load-related, not stress-induced"
            if raw_gut is not None and raw_gut > 7
            else "Inflammatory signal detected."
        ),
        signals=(
            "No cramping detected during high intensity.",
            "No bloating reported in T-60 window.",
            "Heart rate variability (inferred) remained stable.",
        ),
        contributors=tuple(contributors),
        negatives=(
            "Not intolerance driven.",
            "Not cortisol-driven GI distress.",
            "Not caffeine mis-timing.",
        ),
    )

    return AnalysisReport(
        readiness=readiness,
        outcome=outcome_for(readiness),
        adherence=adherence,
        risk_level=(
            "Low, with minor adjustments" if readiness > 8 else "Moderate, requires protocol review"
        ),
        deviations=deviations,
        interpretation=interpretation,
        recommendations=tuple(recommendations),
        confidence=ConfidenceBlock(stability="High", fueling_risk="Low", change_need="No"),
        coach_note=COACH_NOTES[math.floor(readiness) % len(COACH_NOTES)],
    )

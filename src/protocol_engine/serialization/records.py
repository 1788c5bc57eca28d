"""Plain-dict codecs for persisted records.

Converts profiles, log entries (with their plans, feedback and analysis)
and future events to JSON-ready dicts and back. Keys are camelCase to
match the stored record format; datetimes are ISO-8601 strings and
calendar dates are ``YYYY-MM-DD``.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any

from protocol_engine.models.analysis import (
    AnalysisReport,
    ConfidenceBlock,
    Deviation,
    Interpretation,
    RecommendationGroup,
)
from protocol_engine.models.enums import (
    AdhocType,
    DurationBucket,
    EventStatus,
    EventType,
    FutureEventType,
    Gender,
    Intensity,
    RiskLevel,
    SessionStatus,
    SessionTimeBucket,
    Severity,
    Theme,
    TravelMode,
)
from protocol_engine.models.log_entry import FutureEvent, LogEntry, SessionFeedback
from protocol_engine.models.profile import AdhocEvent, Intolerance, UserProfile
from protocol_engine.models.session import TravelPlan
from protocol_engine.models.timeline import TimelineEvent, TimelinePlan


def to_json_string(record: dict | list, indent: int = 2) -> str:
    return json.dumps(record, indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


def profile_to_dict(profile: UserProfile) -> dict:
    return {
        "name": profile.name,
        "weight": profile.weight_kg,
        "height": profile.height_cm,
        "gender": profile.gender.value,
        "bodyFat": profile.body_fat_pct,
        "intolerances": [
            {"name": i.name, "severity": i.severity.value} for i in profile.intolerances
        ],
        "diagnoses": list(profile.diagnoses),
        "medications": list(profile.medications),
        "supplements": list(profile.supplements),
        "adhocEvents": [adhoc_to_dict(e) for e in profile.adhoc_events],
    }


def profile_from_dict(data: dict) -> UserProfile:
    """Build a profile, accepting legacy plain-string intolerances."""
    intolerances = []
    for item in data.get("intolerances") or ():
        if isinstance(item, str):
            intolerances.append(Intolerance(name=item))
        else:
            intolerances.append(Intolerance(
                name=item["name"],
                severity=Severity(item.get("severity", Severity.MODERATE.value)),
            ))

    defaults = UserProfile.default()
    return UserProfile(
        weight_kg=data.get("weight", defaults.weight_kg),
        gender=Gender(data.get("gender", defaults.gender.value)),
        height_cm=data.get("height"),
        name=data.get("name"),
        body_fat_pct=data.get("bodyFat"),
        intolerances=tuple(intolerances),
        diagnoses=tuple(data.get("diagnoses") or ()),
        medications=tuple(data.get("medications") or ()),
        supplements=tuple(data.get("supplements") or ()),
        adhoc_events=tuple(adhoc_from_dict(e) for e in data.get("adhocEvents") or ()),
    )


def adhoc_to_dict(event: AdhocEvent) -> dict:
    return {
        "id": event.id,
        "type": event.type.value,
        "timestamp": _dt_out(event.timestamp),
        "detail": event.detail,
    }


def adhoc_from_dict(data: dict) -> AdhocEvent:
    return AdhocEvent(
        id=data["id"],
        type=AdhocType(data["type"]),
        timestamp=_dt_in(data["timestamp"]),
        detail=data.get("detail"),
    )


def travel_to_dict(travel: TravelPlan) -> dict:
    return {
        "isTraveling": travel.is_traveling,
        "startTime": _dt_out(travel.start_time),
        "durationMinutes": travel.duration_minutes,
        "mode": travel.mode.value,
    }


def travel_from_dict(data: dict) -> TravelPlan:
    return TravelPlan(
        is_traveling=bool(data.get("isTraveling")),
        start_time=_dt_in(data.get("startTime")),
        duration_minutes=data.get("durationMinutes"),
        mode=TravelMode(data.get("mode", TravelMode.OTHER.value)),
    )


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


def event_to_dict(event: TimelineEvent) -> dict:
    return {
        "timeMarkup": event.time_markup,
        "label": event.label,
        "title": event.title,
        "details": list(event.details),
        "type": event.type.value,
        "status": event.status.value,
        "riskLevel": event.risk_level.value,
        "riskFactors": list(event.risk_factors),
        "timestamp": _dt_out(event.timestamp),
        "containsCaffeine": event.contains_caffeine,
    }


def event_from_dict(data: dict) -> TimelineEvent:
    return TimelineEvent(
        time_markup=data["timeMarkup"],
        label=data["label"],
        title=data["title"],
        type=EventType(data["type"]),
        timestamp=_dt_in(data["timestamp"]),
        details=tuple(data.get("details") or ()),
        status=EventStatus(data.get("status", EventStatus.UPCOMING.value)),
        risk_level=RiskLevel(data.get("riskLevel", RiskLevel.LOW.value)),
        risk_factors=tuple(data.get("riskFactors") or ()),
        contains_caffeine=bool(data.get("containsCaffeine", False)),
    )


def plan_to_dict(plan: TimelinePlan) -> dict:
    return {
        "headline": plan.headline,
        "theme": plan.theme.value,
        "displayTheme": plan.display_theme.value if plan.display_theme else None,
        "timeline": [event_to_dict(e) for e in plan.timeline],
        "memoryContext": plan.memory_context,
    }


def plan_from_dict(data: dict) -> TimelinePlan:
    display = data.get("displayTheme")
    return TimelinePlan(
        headline=data["headline"],
        theme=Theme(data["theme"]),
        timeline=tuple(event_from_dict(e) for e in data.get("timeline") or ()),
        memory_context=data.get("memoryContext"),
        display_theme=Theme(display) if display else None,
    )


# ---------------------------------------------------------------------------
# Feedback & analysis
# ---------------------------------------------------------------------------


def feedback_to_dict(feedback: SessionFeedback) -> dict:
    return {
        "rating": feedback.rating,
        "gutRating": feedback.gut_rating,
        "workedWell": list(feedback.worked_well),
        "workedBadly": list(feedback.worked_badly),
        "notes": feedback.notes,
        "advice": feedback.advice,
    }


def feedback_from_dict(data: dict) -> SessionFeedback:
    return SessionFeedback(
        rating=data["rating"],
        gut_rating=data["gutRating"],
        worked_well=tuple(data.get("workedWell") or ()),
        worked_badly=tuple(data.get("workedBadly") or ()),
        notes=data.get("notes") or "",
        advice=data.get("advice"),
    )


def analysis_to_dict(report: AnalysisReport) -> dict:
    return {
        "readiness": report.readiness,
        "outcome": report.outcome,
        "adherence": report.adherence,
        "riskLevel": report.risk_level,
        "deviations": [
            {"title": d.title, "details": list(d.details)} for d in report.deviations
        ],
        "interpretation": {
            "primary": report.interpretation.primary,
            "signals": list(report.interpretation.signals),
            "contributors": list(report.interpretation.contributors),
            "negatives": list(report.interpretation.negatives),
        },
        "recommendations": [
            {"category": r.category, "items": list(r.items)} for r in report.recommendations
        ],
        "confidence": {
            "stability": report.confidence.stability,
            "fuelingRisk": report.confidence.fueling_risk,
            "changeNeed": report.confidence.change_need,
        },
        "coachNote": report.coach_note,
    }


def analysis_from_dict(data: dict) -> AnalysisReport:
    interp = data["interpretation"]
    conf = data["confidence"]
    return AnalysisReport(
        readiness=data["readiness"],
        outcome=data["outcome"],
        adherence=data["adherence"],
        risk_level=data["riskLevel"],
        deviations=tuple(
            Deviation(d["title"], tuple(d.get("details") or ())) for d in data["deviations"]
        ),
        interpretation=Interpretation(
            primary=interp["primary"],
            signals=tuple(interp.get("signals") or ()),
            contributors=tuple(interp.get("contributors") or ()),
            negatives=tuple(interp.get("negatives") or ()),
        ),
        recommendations=tuple(
            RecommendationGroup(r["category"], tuple(r.get("items") or ()))
            for r in data["recommendations"]
        ),
        confidence=ConfidenceBlock(
            stability=conf["stability"],
            fueling_risk=conf["fuelingRisk"],
            change_need=conf["changeNeed"],
        ),
        coach_note=data["coachNote"],
    )


# ---------------------------------------------------------------------------
# Log entries & future events
# ---------------------------------------------------------------------------


def log_to_dict(log: LogEntry) -> dict:
    return {
        "id": log.id,
        "timestamp": _dt_out(log.timestamp),
        "sessionTime": log.session_time.value,
        "intensity": log.intensity.value,
        "duration": log.duration.value,
        "gutScale": log.gut_scale,
        "symptoms": list(log.symptoms),
        "plan": plan_to_dict(log.plan) if log.plan else None,
        "status": log.status.value,
        "travel": travel_to_dict(log.travel) if log.travel else None,
        "title": log.title,
        "notes": log.notes,
        "updatedAt": _dt_out(log.updated_at),
        "targetStartTime": _dt_out(log.target_start_time),
        "leadTimeDays": log.lead_time_days,
        "adhocEvents": [adhoc_to_dict(e) for e in log.adhoc_events],
        "feedback": feedback_to_dict(log.feedback) if log.feedback else None,
        "analysis": analysis_to_dict(log.analysis) if log.analysis else None,
    }


def log_from_dict(data: dict) -> LogEntry:
    return LogEntry(
        id=data["id"],
        timestamp=_dt_in(data["timestamp"]),
        session_time=SessionTimeBucket(data["sessionTime"]),
        intensity=Intensity(data["intensity"]),
        duration=DurationBucket(data["duration"]),
        gut_scale=data.get("gutScale"),
        symptoms=tuple(data.get("symptoms") or ()),
        plan=_optional(plan_from_dict, data.get("plan")),
        status=SessionStatus(data.get("status", SessionStatus.ACTIVE.value)),
        travel=_optional(travel_from_dict, data.get("travel")),
        title=data.get("title"),
        notes=data.get("notes"),
        updated_at=_dt_in(data.get("updatedAt")),
        target_start_time=_dt_in(data.get("targetStartTime")),
        lead_time_days=data.get("leadTimeDays"),
        adhoc_events=tuple(adhoc_from_dict(e) for e in data.get("adhocEvents") or ()),
        feedback=_optional(feedback_from_dict, data.get("feedback")),
        analysis=_optional(analysis_from_dict, data.get("analysis")),
    )


def future_event_to_dict(event: FutureEvent) -> dict:
    return {
        "id": event.id,
        "date": event.date.isoformat(),
        "type": event.type.value,
        "title": event.title,
        "intensity": event.intensity.value,
        "duration": event.duration.value,
        "processed": event.processed,
    }


def future_event_from_dict(data: dict) -> FutureEvent:
    return FutureEvent(
        id=data["id"],
        date=date.fromisoformat(data["date"]),
        type=FutureEventType(data["type"]),
        title=data["title"],
        intensity=Intensity(data["intensity"]),
        duration=DurationBucket(data["duration"]),
        processed=bool(data.get("processed", False)),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _dt_out(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _dt_in(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _optional(decode: Any, value: dict | None) -> Any:
    return decode(value) if value else None

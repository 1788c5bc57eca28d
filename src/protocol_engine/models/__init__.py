"""Data models for the protocol engine."""

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
    GutTier,
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
from protocol_engine.models.session import SessionContext, TravelPlan
from protocol_engine.models.timeline import TimelineEvent, TimelinePlan
from protocol_engine.models.trace import GenerationTrace, PhaseResult, PhaseStatus

__all__ = [
    "AdhocEvent",
    "AdhocType",
    "AnalysisReport",
    "ConfidenceBlock",
    "Deviation",
    "DurationBucket",
    "EventStatus",
    "EventType",
    "FutureEvent",
    "FutureEventType",
    "Gender",
    "GenerationTrace",
    "GutTier",
    "Intensity",
    "Interpretation",
    "Intolerance",
    "LogEntry",
    "PhaseResult",
    "PhaseStatus",
    "RecommendationGroup",
    "RiskLevel",
    "SessionContext",
    "SessionFeedback",
    "SessionStatus",
    "SessionTimeBucket",
    "Severity",
    "Theme",
    "TimelineEvent",
    "TimelinePlan",
    "TravelMode",
    "TravelPlan",
    "UserProfile",
]

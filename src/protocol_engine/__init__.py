"""Protocol engine — deterministic gut-aware nutrition and training timelines."""

from protocol_engine.analysis.coach_report import generate_analysis
from protocol_engine.engine import ProtocolEngine, generate_timeline
from protocol_engine.exceptions import InvalidSessionRequest, ProtocolError
from protocol_engine.insights import InsightTip, aggregate_tips
from protocol_engine.models.session import SessionContext, TravelPlan
from protocol_engine.models.timeline import TimelineEvent, TimelinePlan

__all__ = [
    "InsightTip",
    "InvalidSessionRequest",
    "ProtocolEngine",
    "ProtocolError",
    "SessionContext",
    "TimelineEvent",
    "TimelinePlan",
    "TravelPlan",
    "aggregate_tips",
    "generate_analysis",
    "generate_timeline",
]

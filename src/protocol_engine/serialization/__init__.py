"""Serialization module — plain-dict codecs for persisted records."""

from protocol_engine.serialization.records import (
    analysis_from_dict,
    analysis_to_dict,
    future_event_from_dict,
    future_event_to_dict,
    log_from_dict,
    log_to_dict,
    plan_from_dict,
    plan_to_dict,
    profile_from_dict,
    profile_to_dict,
    to_json_string,
)

__all__ = [
    "analysis_from_dict",
    "analysis_to_dict",
    "future_event_from_dict",
    "future_event_to_dict",
    "log_from_dict",
    "log_to_dict",
    "plan_from_dict",
    "plan_to_dict",
    "profile_from_dict",
    "profile_to_dict",
    "to_json_string",
]

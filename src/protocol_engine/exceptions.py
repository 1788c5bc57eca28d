"""Protocol exception hierarchy.

The engine itself never raises for a structurally valid request. These
exceptions belong to the layers around it: request gates and storage.
"""


class ProtocolError(Exception):
    """Base exception for all protocol planner errors."""


class InvalidSessionRequest(ProtocolError):
    """A check-in request was rejected before generation (past start, no duration)."""

"""Exception hierarchy for the local JSON store."""

from __future__ import annotations

from protocol_engine.exceptions import ProtocolError


class StoreError(ProtocolError):
    """Base exception for all protocol_store errors."""


class StoreCorruptError(StoreError):
    """A stored file exists but does not hold valid JSON of the expected shape."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class RecordNotFoundError(StoreError):
    """No record with the requested id exists."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"No {kind} with id {record_id!r}")
        self.kind = kind
        self.record_id = record_id

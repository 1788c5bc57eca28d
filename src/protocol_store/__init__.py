"""Local JSON store for logs, the profile and scheduled future events."""

from protocol_store.exceptions import RecordNotFoundError, StoreCorruptError, StoreError
from protocol_store.local_store import LocalStore

__all__ = [
    "LocalStore",
    "RecordNotFoundError",
    "StoreCorruptError",
    "StoreError",
]

"""Record store adapters."""

from .base import Record, RecordStore
from .http_store import HttpRecordStore
from .memory_store import InMemoryRecordStore

__all__ = [
    "HttpRecordStore",
    "InMemoryRecordStore",
    "Record",
    "RecordStore",
]

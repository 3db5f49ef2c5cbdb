"""Record storage capability and its schema-aware manager."""

from actionlog.records.manager import RecordManager
from actionlog.records.store import Record, RecordStore
from actionlog.records.stores.inmemory import InMemoryRecordStore

__all__ = [
    "InMemoryRecordStore",
    "Record",
    "RecordManager",
    "RecordStore",
]

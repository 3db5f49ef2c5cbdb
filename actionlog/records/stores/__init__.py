"""Record stores."""

from actionlog.records.store import RecordStore
from actionlog.records.stores.inmemory import InMemoryRecordStore

__all__ = [
    "InMemoryRecordStore",
    "RecordStore",
]

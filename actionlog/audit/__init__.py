"""Audit trail: action registration and append-only event log."""

from actionlog.audit.logger import ActionLogger
from actionlog.audit.store import ActionLogStore
from actionlog.audit.stores.inmemory import InMemoryActionLogStore

__all__ = [
    "ActionLogStore",
    "ActionLogger",
    "InMemoryActionLogStore",
]

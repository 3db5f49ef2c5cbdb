"""Action log stores."""

from actionlog.audit.store import ActionLogStore
from actionlog.audit.stores.inmemory import InMemoryActionLogStore

__all__ = [
    "ActionLogStore",
    "InMemoryActionLogStore",
]

"""RecordStore abstract interface."""

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]


class RecordStore(ABC):
    """Abstract interface for durable record storage.

    Records are plain field maps keyed by schema. The store owns the
    record identifier, exposed as the "id" field.
    """

    async def init(self) -> None:
        """Prepare the backend; the default does nothing."""
        return None

    def register_schema(self, schema_key: str, schema: Any) -> None:  # noqa: ARG002
        """Make the backend aware of a schema; the default does nothing."""
        return None

    @abstractmethod
    async def find_one(self, schema_key: str, filter: Record) -> Record | None:
        """Get the first record matching every key of the filter."""
        pass

    @abstractmethod
    async def insert(self, schema_key: str, data: Record) -> Record:
        """Create a record, returning it with its id."""
        pass

    @abstractmethod
    async def update(self, schema_key: str, id: Any, patch: Record) -> Record:
        """Merge a patch into the record with the given id."""
        pass

    @abstractmethod
    async def upsert(self, schema_key: str, filter: Record, data: Record) -> Record:
        """Update the record matching the filter, or insert filter + data."""
        pass

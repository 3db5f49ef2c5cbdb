"""In-memory implementation of RecordStore."""

import copy
from typing import Any

from actionlog.exceptions import NotFoundError
from actionlog.records.store import Record, RecordStore


class InMemoryRecordStore(RecordStore):
    """In-memory implementation of RecordStore for testing and development.

    Uses per-schema lists with linear scan for lookups and an
    auto-incrementing integer id. Records are copied on the way in and
    out so callers never share state with the store.
    Not suitable for production use.
    """

    def __init__(self, instances: dict[str, list[Record]] | None = None) -> None:
        self.instances: dict[str, list[Record]] = {}
        self._next_id = 1
        for schema_key, records in (instances or {}).items():
            for record in records:
                self._add(schema_key, record)

    def _add(self, schema_key: str, data: Record) -> Record:
        record = copy.deepcopy(data)
        if record.get("id") is None:
            record["id"] = self._next_id
        if isinstance(record["id"], int):
            self._next_id = max(self._next_id, record["id"] + 1)
        self.instances.setdefault(schema_key, []).append(record)
        return record

    def _match(self, schema_key: str, filter: Record) -> Record | None:
        for record in self.instances.get(schema_key, []):
            if all(key in record and record[key] == value for key, value in filter.items()):
                return record
        return None

    async def find_one(self, schema_key: str, filter: Record) -> Record | None:
        record = self._match(schema_key, filter)
        return copy.deepcopy(record) if record is not None else None

    async def insert(self, schema_key: str, data: Record) -> Record:
        return copy.deepcopy(self._add(schema_key, data))

    async def update(self, schema_key: str, id: Any, patch: Record) -> Record:
        record = self._match(schema_key, {"id": id})
        if record is None:
            raise NotFoundError.for_filter({"id": id})
        record.update(copy.deepcopy(patch))
        record["id"] = id
        return copy.deepcopy(record)

    async def upsert(self, schema_key: str, filter: Record, data: Record) -> Record:
        record = self._match(schema_key, filter)
        if record is None:
            return copy.deepcopy(self._add(schema_key, {**filter, **data}))
        record_id = record["id"]
        record.update(copy.deepcopy(data))
        record["id"] = record_id
        return copy.deepcopy(record)

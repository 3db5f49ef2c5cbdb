"""Record manager: schema-aware facade over a RecordStore."""

import asyncio
from typing import Any

from actionlog.exceptions import SchemaNotRegisteredError
from actionlog.observability.logging import get_logger
from actionlog.records.store import Record, RecordStore
from actionlog.schemas.compiler import SchemaCompiler, Validator

logger = get_logger(__name__)


class RecordManager:
    """Guard record operations behind schema registration.

    Every data operation waits for pending store initialization and
    refuses schemas that were never registered. Transaction hooks are
    present for callers that expect them but do not provide isolation.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.schemas: dict[str, Any] = {}
        self.validators: dict[str, Validator] = {}
        self._init_task: asyncio.Task[None] | None = None

    async def init(self) -> None:
        """Schedule store initialization; data operations await it."""
        self._init_task = asyncio.ensure_future(self.store.init())

    async def _ensure_ready(self) -> None:
        if self._init_task is not None:
            await self._init_task
            self._init_task = None

    def register_schema(
        self, key: str, schema: Any, compiler: SchemaCompiler
    ) -> None:
        """Register a schema and compile its validator."""
        self.schemas[key] = schema
        self.validators[key] = compiler.compile(schema)
        self.store.register_schema(key, schema)
        logger.info("schema_registered", schema_key=key)

    def validate(self, schema_key: str, values: dict[str, Any]) -> bool | list[str]:
        """Validate values against a registered schema."""
        self._require_schema(schema_key)
        return self.validators[schema_key](values)

    def _require_schema(self, schema_key: str) -> None:
        if schema_key not in self.schemas:
            raise SchemaNotRegisteredError(schema_key)

    async def begin_transaction(self) -> None:
        pass

    async def end_transaction(self) -> None:
        pass

    async def rollback_transaction(self) -> None:
        pass

    async def insert(self, schema_key: str, data: Record) -> Record:
        await self._ensure_ready()
        self._require_schema(schema_key)
        return await self.store.insert(schema_key, data)

    async def find_one(self, schema_key: str, filter: Record) -> Record | None:
        await self._ensure_ready()
        self._require_schema(schema_key)
        return await self.store.find_one(schema_key, filter)

    async def update(self, schema_key: str, id: Any, patch: Record) -> Record:
        await self._ensure_ready()
        self._require_schema(schema_key)
        return await self.store.update(schema_key, id, patch)

    async def upsert(self, schema_key: str, filter: Record, data: Record) -> Record:
        await self._ensure_ready()
        self._require_schema(schema_key)
        return await self.store.upsert(schema_key, filter, data)

"""Core: the coordinating context for action processing.

Owns the record manager, the action logger and the trigger registry,
and runs the full pipeline for a single action:

    blank -> Action -> log_action -> populate_with_old
          -> perform_prepatching -> apply merged diff
"""

from collections.abc import Iterable, Mapping
from typing import Any

from structlog.contextvars import bound_contextvars

from actionlog.actions.action import Action
from actionlog.actions.enums import ActionType
from actionlog.audit.logger import ActionLogger
from actionlog.audit.store import ActionLogStore
from actionlog.audit.stores.inmemory import InMemoryActionLogStore
from actionlog.config import Settings, get_settings
from actionlog.config.models.engine import EngineConfig
from actionlog.observability.logging import get_logger, setup_logging
from actionlog.records.manager import RecordManager
from actionlog.records.store import Record, RecordStore
from actionlog.records.stores.inmemory import InMemoryRecordStore
from actionlog.schemas.compiler import PydanticSchemaCompiler, SchemaCompiler
from actionlog.triggers.models import Condition, PatchFn, PredicateFn, Trigger
from actionlog.triggers.registry import TriggerRegistry

logger = get_logger(__name__)


class Core:
    """Coordinate record access, audit logging and prepatch triggers.

    Actions receive the core in populate_with_old() and
    perform_prepatching(); they reach the record store through
    find_one(), the audit log through `logger` and their schema's
    triggers through `triggers`.
    """

    def __init__(
        self,
        record_store: RecordStore | None = None,
        log_store: ActionLogStore | None = None,
        engine_config: EngineConfig | None = None,
        schema_compiler: SchemaCompiler | None = None,
    ) -> None:
        """Initialize the core.

        Args:
            record_store: Durable record storage (in-memory if omitted)
            log_store: Action log storage (in-memory if omitted)
            engine_config: Cascade settings (defaults if omitted)
            schema_compiler: Default compiler for register_schema()
        """
        self.manager = RecordManager(record_store or InMemoryRecordStore())
        self.logger = ActionLogger(log_store or InMemoryActionLogStore())
        self.triggers = TriggerRegistry()
        self.engine_config = engine_config or EngineConfig()
        self._schema_compiler = schema_compiler or PydanticSchemaCompiler()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        configure_logging: bool = False,
    ) -> "Core":
        """Build a core from configuration.

        Only the in-memory backends exist, so the storage section merely
        selects them. With configure_logging, structlog is set up from
        the observability section.
        """
        settings = settings or get_settings()
        if configure_logging:
            logging_config = settings.observability.logging
            setup_logging(
                level=logging_config.level,
                format=logging_config.format,
                redact_pii=logging_config.redact_pii,
            )
        return cls(
            record_store=InMemoryRecordStore(),
            log_store=InMemoryActionLogStore(),
            engine_config=settings.engine,
        )

    async def init(self) -> None:
        """Initialize the record store."""
        await self.manager.init()

    def register_schema(
        self,
        key: str,
        schema: Any,
        compiler: SchemaCompiler | None = None,
    ) -> None:
        """Register a schema with the record manager."""
        self.manager.register_schema(key, schema, compiler or self._schema_compiler)

    def validate(self, schema_key: str, values: dict[str, Any]) -> bool | list[str]:
        """Validate values against a registered schema."""
        return self.manager.validate(schema_key, values)

    def hook_prepatch(
        self,
        schema_key: str,
        *,
        key: str,
        condition: Condition | Iterable[str] | PredicateFn,
        patch: PatchFn,
    ) -> Trigger:
        """Register a prepatch trigger for a schema."""
        return self.triggers.hook_prepatch(
            schema_key, key=key, condition=condition, patch=patch
        )

    async def begin_transaction(self) -> None:
        await self.manager.begin_transaction()

    async def end_transaction(self) -> None:
        await self.manager.end_transaction()

    async def rollback_transaction(self) -> None:
        await self.manager.rollback_transaction()

    async def find_one(self, schema_key: str, filter: Record) -> Record | None:
        return await self.manager.find_one(schema_key, filter)

    async def insert(self, schema_key: str, data: Record) -> Record:
        return await self.manager.insert(schema_key, data)

    async def update(self, schema_key: str, id: Any, patch: Record) -> Record:
        return await self.manager.update(schema_key, id, patch)

    async def upsert(self, schema_key: str, filter: Record, data: Record) -> Record:
        return await self.manager.upsert(schema_key, filter, data)

    async def prepare(self, blank: Mapping[str, Any]) -> Action:
        """Build, register, diff and prepatch an action without applying it."""
        action = Action.from_blank(blank)
        await self.logger.log_action(action)
        await action.populate_with_old(self)
        await action.perform_prepatching(self)
        return action

    async def apply(self, action: Action) -> Record:
        """Write the action's merged diff to the record store."""
        changes = action.get_freshest_diff()
        if action.type == ActionType.INSERT:
            return await self.insert(action.schema_key, changes)
        if action.type == ActionType.UPDATE:
            return await self.update(action.schema_key, action.instance_id, changes)
        return await self.upsert(action.schema_key, action.lookup_filter(), changes)

    async def execute(self, blank: Mapping[str, Any]) -> tuple[Action, Record]:
        """Run the whole pipeline for one action blank.

        Errors from any phase propagate unchanged; nothing is retried and
        nothing already written to the audit log is undone.
        """
        action = await self.prepare(blank)
        with bound_contextvars(action_id=action.id, schema_key=action.schema_key):
            record = await self.apply(action)
            logger.info("action_applied", record_id=record.get("id"))
        return action, record

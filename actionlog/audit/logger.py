"""Action logger: registers actions and appends their audit events."""

from typing import TYPE_CHECKING

from actionlog.actions.event import Event
from actionlog.audit.store import ActionLogStore
from actionlog.observability.logging import get_logger
from actionlog.observability.metrics import ACTIONS_REGISTERED, EVENTS_EMITTED

if TYPE_CHECKING:
    from actionlog.actions.action import Action

logger = get_logger(__name__)


class ActionLogger:
    """Append-only audit log for actions and their pipeline events.

    The logger is the only component that assigns action and event ids.
    """

    def __init__(self, store: ActionLogStore) -> None:
        self._store = store

    @property
    def store(self) -> ActionLogStore:
        return self._store

    async def log_action(self, action: "Action") -> int:
        """Persist the action and assign its id."""
        action_id = await self._store.save_action(action.to_wire())
        action.id = action_id

        ACTIONS_REGISTERED.labels(action_type=action.type.value).inc()
        logger.info(
            "action_registered",
            action_id=action_id,
            action_type=action.type.value,
            schema_key=action.schema_key,
        )
        return action_id

    async def log_event(self, event: Event) -> Event:
        """Persist the event and return it with its id assigned."""
        stored = await self._store.save_event(event)

        EVENTS_EMITTED.labels(
            stage=stored.stage.name, is_error=str(stored.is_error).lower()
        ).inc()
        logger.debug(
            "audit_event_logged",
            event_id=stored.id,
            action_id=stored.action,
            stage=stored.stage.name,
            is_error=stored.is_error,
        )
        return stored

    async def list_events(self, action_id: int | None = None) -> list[Event]:
        """List persisted events in write order."""
        return await self._store.list_events(action_id=action_id)

"""In-memory implementation of ActionLogStore."""

import copy
from typing import Any

from actionlog.actions.event import Event
from actionlog.audit.store import ActionLogStore


class InMemoryActionLogStore(ActionLogStore):
    """In-memory implementation of ActionLogStore for testing and development.

    Actions and events are numbered independently starting at 1.
    Not suitable for production use.
    """

    def __init__(self) -> None:
        self._actions: dict[int, dict[str, Any]] = {}
        self._events: list[Event] = []

    @property
    def events(self) -> list[Event]:
        """All persisted events in write order."""
        return list(self._events)

    async def save_action(self, record: dict[str, Any]) -> int:
        action_id = len(self._actions) + 1
        self._actions[action_id] = {**copy.deepcopy(record), "id": action_id}
        return action_id

    async def get_action(self, action_id: int) -> dict[str, Any] | None:
        record = self._actions.get(action_id)
        return copy.deepcopy(record) if record is not None else None

    async def save_event(self, event: Event) -> Event:
        stored = event.model_copy(
            update={"id": len(self._events) + 1}, deep=True
        )
        self._events.append(stored)
        return stored

    async def list_events(
        self,
        *,
        action_id: int | None = None,
    ) -> list[Event]:
        return [
            event for event in self._events
            if action_id is None or event.action == action_id
        ]

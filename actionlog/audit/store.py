"""ActionLogStore abstract interface."""

from abc import ABC, abstractmethod
from typing import Any

from actionlog.actions.event import Event


class ActionLogStore(ABC):
    """Abstract append-only storage for registered actions and their events.

    Implementations assign monotonically increasing integer ids so that
    ascending id order reflects write order.
    """

    @abstractmethod
    async def save_action(self, record: dict[str, Any]) -> int:
        """Persist an action snapshot, returning its new id."""
        pass

    @abstractmethod
    async def get_action(self, action_id: int) -> dict[str, Any] | None:
        """Get a persisted action snapshot by id."""
        pass

    @abstractmethod
    async def save_event(self, event: Event) -> Event:
        """Persist an event, returning it with its id assigned."""
        pass

    @abstractmethod
    async def list_events(
        self,
        *,
        action_id: int | None = None,
    ) -> list[Event]:
        """List events in ascending id order, optionally for one action."""
        pass

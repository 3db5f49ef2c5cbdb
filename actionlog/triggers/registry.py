"""Per-schema registry of prepatch triggers."""

from collections.abc import Iterable

from actionlog.observability.logging import get_logger
from actionlog.triggers.models import (
    Condition,
    PatchFn,
    PredicateFn,
    Trigger,
    as_condition,
)

logger = get_logger(__name__)


class TriggerRegistry:
    """Ordered trigger lists keyed by schema.

    Registration order is the evaluation order within a cascade round.
    Registering a key that already exists for the schema replaces the
    trigger in place, keeping its original position.
    """

    def __init__(self) -> None:
        self._triggers: dict[str, dict[str, Trigger]] = {}

    def hook_prepatch(
        self,
        schema_key: str,
        *,
        key: str,
        condition: Condition | Iterable[str] | PredicateFn,
        patch: PatchFn,
    ) -> Trigger:
        """Register a prepatch trigger for a schema."""
        if not key:
            raise ValueError("Trigger key is required")
        if not callable(patch):
            raise TypeError("Trigger patch must be callable")

        trigger = Trigger(key=key, condition=as_condition(condition), patch=patch)
        schema_triggers = self._triggers.setdefault(schema_key, {})
        replaced = key in schema_triggers
        schema_triggers[key] = trigger

        logger.debug(
            "prepatch_trigger_registered",
            schema_key=schema_key,
            trigger=key,
            replaced=replaced,
        )
        return trigger

    def get_triggers(self, schema_key: str) -> list[Trigger]:
        """Return the schema's triggers in registration order."""
        return list(self._triggers.get(schema_key, {}).values())

    def __len__(self) -> int:
        return sum(len(triggers) for triggers in self._triggers.values())

"""Trigger and condition models.

A condition is either a set of field names (fires when the round
snapshot carries any of them) or a predicate over the action. Both
variants expose the same evaluate() coroutine so the cascade engine
never inspects which one it holds.
"""

import inspect
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from actionlog.actions.action import Action

PredicateFn = Callable[["Action"], Union[bool, Awaitable[bool]]]
PatchFn = Callable[
    ["Action", dict[str, Any]],
    Union[Mapping[str, Any], Awaitable[Mapping[str, Any]]],
]


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass(frozen=True)
class FieldSetCondition:
    """Fires when the snapshot owns at least one of the listed fields."""

    fields: tuple[str, ...]

    async def evaluate(self, action: "Action", snapshot: Mapping[str, Any]) -> bool:  # noqa: ARG002
        return any(name in snapshot for name in self.fields)


@dataclass(frozen=True)
class PredicateCondition:
    """Fires when the predicate returns a truthy value for the action."""

    predicate: PredicateFn

    async def evaluate(self, action: "Action", snapshot: Mapping[str, Any]) -> bool:  # noqa: ARG002
        return bool(await _resolve(self.predicate(action)))


Condition = FieldSetCondition | PredicateCondition


def as_condition(value: Condition | Iterable[str] | PredicateFn) -> Condition:
    """Normalize a registration-time condition into a Condition variant.

    Accepts an existing variant, an iterable of field names or a callable.
    """
    if isinstance(value, (FieldSetCondition, PredicateCondition)):
        return value
    if isinstance(value, str):
        raise TypeError("Trigger condition must be a list of field names, not a string")
    if callable(value):
        return PredicateCondition(predicate=value)
    fields = tuple(value)
    if not all(isinstance(name, str) for name in fields):
        raise TypeError("Trigger condition field names must be strings")
    return FieldSetCondition(fields=fields)


@dataclass(frozen=True)
class Trigger:
    """A registered prepatch rule for one schema."""

    key: str
    condition: Condition
    patch: PatchFn

    async def apply_patch(
        self, action: "Action", projected: dict[str, Any]
    ) -> dict[str, Any]:
        """Run the patch callback and return its field map as a plain dict.

        Raises:
            TypeError: If the callback returns anything but a mapping
        """
        result = await _resolve(self.patch(action, projected))
        if not isinstance(result, Mapping):
            raise TypeError(
                f"Trigger {self.key} patch returned {type(result).__name__}, expected a mapping"
            )
        return dict(result)

"""Prepatch triggers: conditions, patches and their registry."""

from actionlog.triggers.models import (
    Condition,
    FieldSetCondition,
    PredicateCondition,
    Trigger,
    as_condition,
)
from actionlog.triggers.registry import TriggerRegistry

__all__ = [
    "Condition",
    "FieldSetCondition",
    "PredicateCondition",
    "Trigger",
    "TriggerRegistry",
    "as_condition",
]

"""actionlog: record-mutation pipeline with cascading prepatch triggers.

Components:
  actions: Action (validation, diff, trigger cascade) and Event
  triggers: condition variants and the per-schema trigger registry
  records: RecordStore capability and the schema-aware RecordManager
  audit: append-only action/event log
  core: Core, the coordinating context that runs the pipeline
"""

from actionlog.actions import Action, ActionStatus, ActionType, Event, EventStage
from actionlog.core import Core
from actionlog.exceptions import (
    ActionLogError,
    NotFoundError,
    SchemaNotRegisteredError,
    StructuralValidationError,
    TriggerConditionError,
    TriggerPatchError,
)
from actionlog.triggers import FieldSetCondition, PredicateCondition

__all__ = [
    "Action",
    "ActionLogError",
    "ActionStatus",
    "ActionType",
    "Core",
    "Event",
    "EventStage",
    "FieldSetCondition",
    "NotFoundError",
    "PredicateCondition",
    "SchemaNotRegisteredError",
    "StructuralValidationError",
    "TriggerConditionError",
    "TriggerPatchError",
]

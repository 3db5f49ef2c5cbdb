"""Exception hierarchy for the action pipeline.

All library errors inherit from ActionLogError, which carries an
error_code used by callers to classify failures without matching
on message text.
"""

import json
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error classification."""

    STRUCTURAL_VALIDATION = "structural_validation"
    NOT_FOUND = "not_found"
    TRIGGER_CONDITION = "trigger_condition"
    TRIGGER_PATCH = "trigger_patch"
    SCHEMA_NOT_REGISTERED = "schema_not_registered"


class ActionLogError(Exception):
    """Base exception for all pipeline errors."""

    error_code: ErrorCode = ErrorCode.STRUCTURAL_VALIDATION

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StructuralValidationError(ActionLogError):
    """Raised when an action blank has the wrong shape."""

    error_code = ErrorCode.STRUCTURAL_VALIDATION


class NotFoundError(ActionLogError):
    """Raised when the pre-image of an UPDATE or UPSERT does not exist."""

    error_code = ErrorCode.NOT_FOUND

    def __init__(self, message: str, filter: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.filter = filter

    @classmethod
    def for_filter(cls, filter: dict[str, Any]) -> "NotFoundError":
        """Build the error for a lookup filter that matched nothing."""
        return cls(
            "Item not found " + json.dumps(
                filter, separators=(",", ":"), ensure_ascii=False, default=str
            ),
            filter=filter,
        )


class TriggerError(ActionLogError):
    """Base for failures raised from trigger callbacks."""

    def __init__(self, message: str, trigger: str, depth: int) -> None:
        super().__init__(message)
        self.trigger = trigger
        self.depth = depth


class TriggerConditionError(TriggerError):
    """Raised when a trigger condition callback fails."""

    error_code = ErrorCode.TRIGGER_CONDITION


class TriggerPatchError(TriggerError):
    """Raised when a trigger patch callback fails."""

    error_code = ErrorCode.TRIGGER_PATCH


class SchemaNotRegisteredError(ActionLogError):
    """Raised when a record operation targets an unknown schema."""

    error_code = ErrorCode.SCHEMA_NOT_REGISTERED

    def __init__(self, schema_key: str) -> None:
        super().__init__(f"Schema {schema_key} is not registered")
        self.schema_key = schema_key

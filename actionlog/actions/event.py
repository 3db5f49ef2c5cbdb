"""Event model for the actions domain."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from actionlog.actions.enums import EventStage


class Event(BaseModel):
    """Immutable audit record describing one pipeline step.

    in_data and out_data carry stage-specific snapshots whose keys are
    part of the audit wire format. The id is assigned by the action
    logger when the event is persisted; events are never rewritten.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = Field(default=None, description="Assigned by the logger")
    action: int = Field(..., description="Owning action id")
    stage: EventStage = Field(..., description="Pipeline step documented")
    is_error: bool = Field(default=False, description="Whether the step failed")
    in_data: dict[str, Any] = Field(
        default_factory=dict, description="Step input snapshot"
    )
    out_data: dict[str, Any] = Field(
        default_factory=dict, description="Step result snapshot"
    )
    error_message: str = Field(default="", description="Empty on success")

    def to_wire(self) -> dict[str, Any]:
        """Return the camelCase audit representation of this event."""
        return {
            "id": self.id,
            "action": self.action,
            "stage": int(self.stage),
            "isError": self.is_error,
            "inData": self.in_data,
            "outData": self.out_data,
            "errorMessage": self.error_message,
        }

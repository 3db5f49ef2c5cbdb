"""Actions domain: mutation intents and the audit events they produce."""

from actionlog.actions.action import Action, diff_against
from actionlog.actions.enums import ActionStatus, ActionType, EventStage
from actionlog.actions.event import Event

__all__ = [
    # Enums
    "ActionStatus",
    "ActionType",
    "EventStage",
    # Models
    "Action",
    "Event",
    "diff_against",
]

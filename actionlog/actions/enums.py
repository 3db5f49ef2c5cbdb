"""Enums for the actions domain."""

from enum import Enum, IntEnum


class ActionType(str, Enum):
    """Kind of mutation an action requests.

    - INSERT: create a new record, no pre-image
    - UPDATE: modify the record addressed by instance_id
    - UPSERT: modify or create the record matched by instance_filter

    Blanks may also carry the numeric codes "1", "2" and "3".
    """

    INSERT = "insert"
    UPDATE = "update"
    UPSERT = "upsert"

    @classmethod
    def _missing_(cls, value: object) -> "ActionType | None":
        codes = {"1": cls.INSERT, "2": cls.UPDATE, "3": cls.UPSERT}
        return codes.get(value) if isinstance(value, str) else None


class ActionStatus(str, Enum):
    """Lifecycle status of an action.

    Actions are created PENDING and the pipeline never moves them out
    of it; terminal statuses belong to whoever applies the action.
    """

    PENDING = "pending"


class EventStage(IntEnum):
    """Pipeline step an audit event documents.

    Values are part of the audit wire format and must not change.
    """

    FIND_OLD = 1
    PREPATCH_CHECKING = 2
    PREPATCH_PERFORMING = 3

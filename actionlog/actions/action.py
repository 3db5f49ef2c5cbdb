"""Action model and its processing pipeline.

An action is one mutation intent (insert, update or upsert) plus the
state derived while processing it:

1. Construction validates the blank's shape
2. populate_with_old loads the pre-image and computes the field diff
3. perform_prepatching runs the schema's triggers to a fixpoint

Every decision taken in steps 2 and 3 is written to the action log as
an Event before the next step starts.
"""

import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator
from structlog.contextvars import bound_contextvars

from actionlog.actions.enums import ActionStatus, ActionType, EventStage
from actionlog.actions.event import Event
from actionlog.exceptions import (
    NotFoundError,
    StructuralValidationError,
    TriggerConditionError,
    TriggerPatchError,
)
from actionlog.observability.logging import get_logger
from actionlog.observability.metrics import CASCADE_ROUNDS, TRIGGERS_FIRED

if TYPE_CHECKING:
    from actionlog.core import Core
    from actionlog.triggers.models import Trigger

logger = get_logger(__name__)

# (field name, wire name) pairs the pipeline computes itself
CALCULATED_FIELDS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("data_old", "dataOld"),
    ("data_diff", "dataDiff"),
    ("data_diff_prepatched", "dataDiffPrepatched"),
    ("stage", "stage"),
    ("status", "status"),
)


def _supplied(blank: Mapping[str, Any], name: str, alias: str) -> bool:
    return blank.get(name) is not None or blank.get(alias) is not None


def _pick(blank: Mapping[str, Any], name: str, alias: str) -> Any:
    value = blank.get(name)
    return value if value is not None else blank.get(alias)


def _error_message(exc: BaseException) -> str:
    if exc.args and isinstance(exc.args[0], str):
        return exc.args[0]
    return str(exc)


def diff_against(data: Mapping[str, Any], old: Mapping[str, Any]) -> dict[str, Any]:
    """Return the entries of data that change old.

    Keys whose value equals the old value are dropped; keys old does not
    have are kept as they are.
    """
    return {
        key: copy.deepcopy(value)
        for key, value in data.items()
        if key not in old or old[key] != value
    }


class Action(BaseModel):
    """A mutation intent and its progressively computed derived state.

    Actions live only for the duration of one pipeline call. Their
    durable trace is the event log written through the action logger.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=False,
        extra="ignore",
    )

    id: int | None = Field(default=None, description="Assigned by the action logger")
    type: ActionType = Field(..., description="Requested mutation kind")
    status: ActionStatus = Field(default=ActionStatus.PENDING)
    schema_key: str = Field(..., alias="schemaKey", description="Target schema")
    data: dict[str, Any] = Field(..., description="Caller-supplied field values")
    instance_id: Any = Field(default=None, alias="instanceId")
    instance_filter: dict[str, Any] | None = Field(default=None, alias="instanceFilter")
    data_old: dict[str, Any] | None = Field(default=None, alias="dataOld")
    data_diff: dict[str, Any] | None = Field(default=None, alias="dataDiff")
    data_diff_prepatched: dict[str, Any] | None = Field(
        default=None, alias="dataDiffPrepatched"
    )
    stage: EventStage | None = Field(default=None)

    _round_snapshot: Mapping[str, Any] | None = PrivateAttr(default=None)

    @model_validator(mode="before")
    @classmethod
    def _check_blank(cls, blank: Any) -> Any:
        """Reject blanks that do not describe a well-formed action."""
        if not isinstance(blank, Mapping):
            raise StructuralValidationError("Action blank should be an object")

        for name, alias in CALCULATED_FIELDS:
            if _supplied(blank, name, alias):
                raise StructuralValidationError(
                    f"Action.{alias} should be empty, it is calculated by the pipeline"
                )

        try:
            action_type = ActionType(blank.get("type"))
        except (ValueError, TypeError):
            raise StructuralValidationError("Action.type has inappropriate value") from None

        schema_key = _pick(blank, "schema_key", "schemaKey")
        if not schema_key:
            raise StructuralValidationError("Action.schemaKey is required")
        if not isinstance(schema_key, str):
            raise StructuralValidationError("Action.schemaKey should be a string")

        data = blank.get("data")
        if data is None:
            raise StructuralValidationError("Action.data is required")
        if isinstance(data, (list, tuple)):
            raise StructuralValidationError("Action.data should not be an array")
        if not isinstance(data, Mapping):
            raise StructuralValidationError("Action.data should be an object")
        if not all(isinstance(key, str) for key in data):
            raise StructuralValidationError("Action.data keys should be strings")

        has_id = _supplied(blank, "instance_id", "instanceId")
        has_filter = _supplied(blank, "instance_filter", "instanceFilter")
        label = action_type.name

        if action_type == ActionType.INSERT:
            if has_id:
                raise StructuralValidationError(
                    f"Action.instanceId should be empty for {label} type"
                )
            if has_filter:
                raise StructuralValidationError(
                    f"Action.instanceFilter should be empty for {label} type"
                )
        elif action_type == ActionType.UPDATE:
            if not has_id:
                raise StructuralValidationError(
                    f"Action.instanceId is required for {label} type"
                )
            if has_filter:
                raise StructuralValidationError(
                    f"Action.instanceFilter should be empty for {label} type"
                )
        else:
            if has_id:
                raise StructuralValidationError(
                    f"Action.instanceId should be empty for {label} type"
                )
            if not has_filter:
                raise StructuralValidationError(
                    f"Action.instanceFilter is required for {label} type"
                )
            instance_filter = _pick(blank, "instance_filter", "instanceFilter")
            if not isinstance(instance_filter, Mapping):
                raise StructuralValidationError("Action.instanceFilter should be an object")
            if not all(isinstance(key, str) for key in instance_filter):
                raise StructuralValidationError("Action.instanceFilter keys should be strings")

        return {**blank, "type": action_type}

    @classmethod
    def from_blank(cls, blank: Mapping[str, Any]) -> "Action":
        """Build an action from a plain input mapping.

        Raises:
            StructuralValidationError: If the blank is malformed
        """
        return cls.model_validate(blank)

    def lookup_filter(self) -> dict[str, Any]:
        """Filter addressing the pre-image of an UPDATE or UPSERT."""
        if self.type == ActionType.UPDATE:
            return {"id": self.instance_id}
        return copy.deepcopy(self.instance_filter or {})

    def get_freshest_diff(self) -> dict[str, Any]:
        """Requested changes merged with every trigger patch so far.

        While a cascade round is running this returns the snapshot taken
        at the start of the round.
        """
        if self._round_snapshot is not None:
            return copy.deepcopy(dict(self._round_snapshot))
        return self._live_diff()

    def _live_diff(self) -> dict[str, Any]:
        base = self.data_diff if self.data_diff is not None else self.data
        return copy.deepcopy({**base, **(self.data_diff_prepatched or {})})

    def get_projected_instance(self) -> dict[str, Any]:
        """Full record as it would look after applying the freshest diff."""
        return {**copy.deepcopy(self.data_old or {}), **self.get_freshest_diff()}

    def to_wire(self) -> dict[str, Any]:
        """Return the camelCase representation used in the action log."""
        return self.model_dump(by_alias=True)

    def _require_registered(self) -> int:
        if self.id is None:
            raise StructuralValidationError(
                "Action.id is missing, register the action with the logger first"
            )
        return self.id

    async def populate_with_old(self, core: "Core") -> None:
        """Load the pre-image and compute the diff against it.

        INSERT actions have no pre-image and emit no event. For UPDATE and
        UPSERT exactly one FIND_OLD event is written, whether the record
        is found or not.

        Raises:
            NotFoundError: If no record matches the lookup filter
        """
        if self.type == ActionType.INSERT:
            self.data_old = None
            self.data_diff = None
            return

        action_id = self._require_registered()
        self.stage = EventStage.FIND_OLD
        lookup = self.lookup_filter()
        in_data = {
            "instanceId": copy.deepcopy(self.instance_id),
            "instanceFilter": copy.deepcopy(self.instance_filter),
            "data": copy.deepcopy(self.data),
        }

        with bound_contextvars(action_id=action_id, schema_key=self.schema_key):
            found = await core.find_one(self.schema_key, lookup)

            if found is None:
                error = NotFoundError.for_filter(lookup)
                logger.warning("pre_image_not_found", lookup=lookup)
                await core.logger.log_event(
                    Event(
                        action=action_id,
                        stage=EventStage.FIND_OLD,
                        is_error=True,
                        in_data=in_data,
                        out_data={},
                        error_message=error.message,
                    )
                )
                raise error

            self.data_old = found
            self.data_diff = diff_against(self.data, found)
            logger.debug("pre_image_loaded", changed_fields=sorted(self.data_diff))
            await core.logger.log_event(
                Event(
                    action=action_id,
                    stage=EventStage.FIND_OLD,
                    in_data=in_data,
                    out_data={
                        "dataOld": copy.deepcopy(self.data_old),
                        "dataDiff": copy.deepcopy(self.data_diff),
                    },
                )
            )

    async def perform_prepatching(self, core: "Core") -> None:
        """Run the schema's prepatch triggers to a fixpoint.

        Each round evaluates every trigger that has not fired yet, in
        registration order, against the freshest diff captured when the
        round started. A round that fires nothing ends the cascade, as
        does running out of unfired triggers.

        Raises:
            TriggerConditionError: If a condition callback fails
            TriggerPatchError: If a patch callback fails
        """
        action_id = self._require_registered()
        if self.data_diff_prepatched is None:
            self.data_diff_prepatched = {}

        triggers = core.triggers.get_triggers(self.schema_key)
        if not triggers:
            return

        max_rounds = len(triggers)
        if core.engine_config.max_rounds is not None:
            max_rounds = min(max_rounds, core.engine_config.max_rounds)

        fired: set[str] = set()
        rounds = 0

        with bound_contextvars(action_id=action_id, schema_key=self.schema_key):
            try:
                for depth in range(max_rounds):
                    snapshot = MappingProxyType(self._live_diff())
                    self._round_snapshot = snapshot
                    rounds += 1
                    fired_this_round = 0

                    for trigger in triggers:
                        if trigger.key in fired:
                            continue
                        if await self._run_trigger(core, trigger, depth, snapshot):
                            fired.add(trigger.key)
                            fired_this_round += 1

                    if not fired_this_round or len(fired) == len(triggers):
                        break
                else:
                    logger.warning(
                        "prepatch_round_limit_reached",
                        rounds=rounds,
                        unfired=[t.key for t in triggers if t.key not in fired],
                    )
            finally:
                self._round_snapshot = None
                CASCADE_ROUNDS.labels(schema_key=self.schema_key).observe(rounds)

            logger.info("prepatch_completed", rounds=rounds, fired=len(fired))

    def _prepatch_in_data(self, trigger_key: str, depth: int, version: int) -> dict[str, Any]:
        return {
            "trigger": trigger_key,
            "v": version,
            "depth": depth,
            "data": copy.deepcopy(self.data),
            "dataDiff": copy.deepcopy(self.data_diff),
            "dataDiffPrepatched": copy.deepcopy(self.data_diff_prepatched),
            "dataOld": copy.deepcopy(self.data_old),
        }

    async def _run_trigger(
        self,
        core: "Core",
        trigger: "Trigger",
        depth: int,
        snapshot: Mapping[str, Any],
    ) -> bool:
        """Check one trigger and apply its patch if the condition holds.

        Returns True when the trigger fired.
        """
        action_id = self._require_registered()
        in_data = self._prepatch_in_data(
            trigger.key, depth, core.engine_config.event_format_version
        )

        self.stage = EventStage.PREPATCH_CHECKING
        try:
            matched = await trigger.condition.evaluate(self, snapshot)
        except Exception as exc:
            message = _error_message(exc)
            logger.warning(
                "prepatch_condition_failed", trigger=trigger.key, depth=depth, error=message
            )
            await core.logger.log_event(
                Event(
                    action=action_id,
                    stage=EventStage.PREPATCH_CHECKING,
                    is_error=True,
                    in_data=in_data,
                    out_data={},
                    error_message=message,
                )
            )
            raise TriggerConditionError(message, trigger=trigger.key, depth=depth) from exc

        if not matched:
            return False

        await core.logger.log_event(
            Event(
                action=action_id,
                stage=EventStage.PREPATCH_CHECKING,
                in_data=in_data,
                out_data={"conditionResult": True},
            )
        )

        self.stage = EventStage.PREPATCH_PERFORMING
        try:
            patch = await trigger.apply_patch(self, self.get_projected_instance())
        except Exception as exc:
            message = _error_message(exc)
            logger.warning(
                "prepatch_patch_failed", trigger=trigger.key, depth=depth, error=message
            )
            await core.logger.log_event(
                Event(
                    action=action_id,
                    stage=EventStage.PREPATCH_PERFORMING,
                    is_error=True,
                    in_data=in_data,
                    out_data={},
                    error_message=message,
                )
            )
            raise TriggerPatchError(message, trigger=trigger.key, depth=depth) from exc

        self.data_diff_prepatched = {**(self.data_diff_prepatched or {}), **patch}
        TRIGGERS_FIRED.labels(schema_key=self.schema_key).inc()
        logger.debug("prepatch_trigger_fired", trigger=trigger.key, depth=depth)

        await core.logger.log_event(
            Event(
                action=action_id,
                stage=EventStage.PREPATCH_PERFORMING,
                in_data=in_data,
                out_data={"triggerPatch": copy.deepcopy(patch)},
            )
        )
        return True

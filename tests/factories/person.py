"""Person schema, seed records and prepatch triggers used across tests."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from actionlog import Action, Core
from actionlog.config.models import EngineConfig
from actionlog.records import InMemoryRecordStore


class Person(BaseModel):
    """Schema for the "person" records."""

    model_config = ConfigDict(extra="forbid")

    id: int | None = None
    nameFirst: str | None = None
    nameLast: str | None = None
    nameFull: str | None = None
    age: int | None = None


def person_records() -> list[dict[str, Any]]:
    """Fresh copy of the seeded person records."""
    return [
        {"id": 1, "nameFirst": "Rudy", "nameLast": "Cruysbergs", "age": 30},
    ]


async def create_core(
    records: list[dict[str, Any]] | None = None,
    engine_config: EngineConfig | None = None,
) -> Core:
    """Build an initialized core with the person schema registered."""
    store = InMemoryRecordStore(
        instances={"person": person_records() if records is None else records}
    )
    core = Core(record_store=store, engine_config=engine_config)
    await core.init()
    core.register_schema("person", Person)
    return core


async def registered_action(core: Core, blank: dict[str, Any]) -> Action:
    """Construct an action and register it with the core's logger."""
    action = Action.from_blank(blank)
    await core.logger.log_action(action)
    return action


def full_name_from_parts(action: Action, person: dict[str, Any]) -> dict[str, Any]:
    """Derive nameFull from nameFirst and nameLast."""
    parts = [person.get("nameFirst"), person.get("nameLast")]
    return {"nameFull": " ".join(part for part in parts if part)}


def parts_from_full_name(action: Action, person: dict[str, Any]) -> dict[str, Any]:
    """Split nameFull into nameFirst and nameLast."""
    first, _, last = person["nameFull"].partition(" ")
    return {"nameFirst": first, "nameLast": last}


def hook_name_triggers(core: Core) -> None:
    """Register the two mutually dependent name triggers."""
    core.hook_prepatch(
        "person",
        key="fullNameFromParts",
        condition=["nameFirst"],
        patch=full_name_from_parts,
    )
    core.hook_prepatch(
        "person",
        key="partsFromFullName",
        condition=["nameFull"],
        patch=parts_from_full_name,
    )

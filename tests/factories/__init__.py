"""Test factories for creating test data."""

from tests.factories.person import (
    Person,
    create_core,
    full_name_from_parts,
    hook_name_triggers,
    parts_from_full_name,
    person_records,
    registered_action,
)

__all__ = [
    "Person",
    "create_core",
    "full_name_from_parts",
    "hook_name_triggers",
    "parts_from_full_name",
    "person_records",
    "registered_action",
]

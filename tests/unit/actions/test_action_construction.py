"""Tests for Action construction and blank validation."""

import pytest

from actionlog import Action, ActionStatus, ActionType, StructuralValidationError


class TestCalculatedFields:
    """Blanks must not carry fields the pipeline computes."""

    @pytest.mark.parametrize(
        "field",
        ["id", "dataOld", "dataDiff", "dataDiffPrepatched", "stage", "status"],
    )
    def test_wire_name_rejected(self, field: str) -> None:
        """Should reject a calculated field given by its wire name."""
        with pytest.raises(StructuralValidationError, match="should be empty"):
            Action.from_blank({field: 1})

    @pytest.mark.parametrize(
        "field", ["data_old", "data_diff", "data_diff_prepatched"]
    )
    def test_python_name_rejected(self, field: str) -> None:
        """Should reject a calculated field given by its attribute name."""
        with pytest.raises(StructuralValidationError, match="should be empty"):
            Action.from_blank(
                {"type": "insert", "schemaKey": "s1", "data": {}, field: {}}
            )

    def test_checked_before_type(self) -> None:
        """Calculated fields are reported even when everything else is wrong."""
        with pytest.raises(StructuralValidationError, match=r"Action\.status should be empty"):
            Action.from_blank({"type": 678, "status": "pending"})


class TestWrongBlanks:
    """Tests for each structural rule in check order."""

    @pytest.mark.parametrize(
        ("blank", "error"),
        [
            ({"type": 678}, r"Action\.type has inappropriate value"),
            ({}, r"Action\.type has inappropriate value"),
            ({"type": "insert"}, r"Action\.schemaKey is required"),
            ({"type": "1"}, r"Action\.schemaKey is required"),
            (
                {"type": "insert", "schemaKey": 5, "data": {}},
                r"Action\.schemaKey should be a string",
            ),
            ({"type": "insert", "schemaKey": ""}, r"Action\.schemaKey is required"),
            ({"type": "insert", "schemaKey": "s1"}, r"Action\.data is required"),
            (
                {"type": "insert", "schemaKey": "s1", "data": "some string"},
                r"Action\.data should be an object",
            ),
            (
                {"type": "insert", "schemaKey": "s1", "data": []},
                r"Action\.data should not be an array",
            ),
            (
                {"type": "insert", "schemaKey": "s1", "data": {1: "a"}},
                r"Action\.data keys should be strings",
            ),
            (
                {"type": ActionType.INSERT, "schemaKey": "s1", "data": {}, "instanceId": 1},
                r"Action\.instanceId should be empty for INSERT type",
            ),
            (
                {"type": ActionType.INSERT, "schemaKey": "s1", "data": {}, "instanceFilter": {}},
                r"Action\.instanceFilter should be empty for INSERT type",
            ),
            (
                {"type": ActionType.UPDATE, "schemaKey": "s1", "data": {}},
                r"Action\.instanceId is required for UPDATE type",
            ),
            (
                {
                    "type": ActionType.UPDATE,
                    "schemaKey": "s1",
                    "data": {},
                    "instanceId": 1,
                    "instanceFilter": {},
                },
                r"Action\.instanceFilter should be empty for UPDATE type",
            ),
            (
                {"type": ActionType.UPSERT, "schemaKey": "s1", "data": {}, "instanceId": 1},
                r"Action\.instanceId should be empty for UPSERT type",
            ),
            (
                {"type": ActionType.UPSERT, "schemaKey": "s1", "data": {}},
                r"Action\.instanceFilter is required for UPSERT type",
            ),
            (
                {"type": ActionType.UPSERT, "schemaKey": "s1", "data": {}, "instanceFilter": 1},
                r"Action\.instanceFilter should be an object",
            ),
            (
                {"type": "upsert", "schemaKey": "s1", "data": {}, "instanceFilter": {2: "x"}},
                r"Action\.instanceFilter keys should be strings",
            ),
        ],
    )
    def test_rejected(self, blank: dict, error: str) -> None:
        """Should raise StructuralValidationError with the rule's message."""
        with pytest.raises(StructuralValidationError, match=error):
            Action.from_blank(blank)

    def test_non_mapping_blank(self) -> None:
        """Should reject blanks that are not mappings."""
        with pytest.raises(StructuralValidationError):
            Action.model_validate(["insert"])

    def test_error_code(self) -> None:
        """Should classify the failure as a structural validation error."""
        with pytest.raises(StructuralValidationError) as exc_info:
            Action.from_blank({"type": "delete"})
        assert exc_info.value.error_code.value == "structural_validation"


class TestSuccessfulConstruction:
    """Tests for valid blanks."""

    def test_insert(self) -> None:
        """Should build a pending INSERT with no derived state."""
        action = Action.from_blank(
            {"type": ActionType.INSERT, "schemaKey": "s1", "data": {"a1": "v1"}}
        )

        assert action.type == ActionType.INSERT
        assert action.status == ActionStatus.PENDING
        assert action.schema_key == "s1"
        assert action.data == {"a1": "v1"}
        assert action.id is None
        assert action.instance_id is None
        assert action.instance_filter is None
        assert action.data_old is None
        assert action.data_diff is None
        assert action.data_diff_prepatched is None
        assert action.stage is None

    def test_update(self) -> None:
        """Should keep the instance id for UPDATE."""
        action = Action.from_blank(
            {"type": "update", "schemaKey": "s1", "data": {"a1": "v1"}, "instanceId": 1}
        )

        assert action.type == ActionType.UPDATE
        assert action.status == ActionStatus.PENDING
        assert action.instance_id == 1
        assert action.lookup_filter() == {"id": 1}

    def test_upsert(self) -> None:
        """Should keep the instance filter for UPSERT."""
        action = Action.from_blank(
            {
                "type": ActionType.UPSERT,
                "schemaKey": "s1",
                "data": {"a1": "v1"},
                "instanceFilter": {"key": 2},
            }
        )

        assert action.type == ActionType.UPSERT
        assert action.status == ActionStatus.PENDING
        assert action.instance_filter == {"key": 2}
        assert action.lookup_filter() == {"key": 2}

    def test_python_field_names(self) -> None:
        """Should accept attribute names as well as wire names."""
        action = Action(
            type=ActionType.UPDATE, schema_key="s1", data={}, instance_id=0
        )

        assert action.schema_key == "s1"
        assert action.instance_id == 0

    def test_wire_representation(self) -> None:
        """Should dump with camelCase keys."""
        action = Action.from_blank({"type": "insert", "schemaKey": "s1", "data": {"a": 1}})

        wire = action.to_wire()

        assert wire["schemaKey"] == "s1"
        assert wire["dataDiffPrepatched"] is None
        assert wire["status"] == ActionStatus.PENDING

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("1", ActionType.INSERT), ("2", ActionType.UPDATE), ("3", ActionType.UPSERT)],
    )
    def test_numeric_type_codes(self, code: str, expected: ActionType) -> None:
        """Should accept the numeric wire codes for each action type."""
        blank = {"type": code, "schemaKey": "s1", "data": {}}
        if expected == ActionType.UPDATE:
            blank["instanceId"] = 1
        if expected == ActionType.UPSERT:
            blank["instanceFilter"] = {"key": 2}

        assert Action.from_blank(blank).type == expected


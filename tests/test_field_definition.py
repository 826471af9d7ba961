"""Tests for field definition validation and committed snapshots."""

from __future__ import annotations

import json

import pytest

from field_builder.choices import ChoiceSet
from field_builder.errors import DefinitionError
from field_builder.field_definition import (
    CommittedDefinition,
    FieldDefinition,
    validate_definition,
)
from field_builder.ordering import OrderPolicy


def _valid_definition(**overrides) -> FieldDefinition:
    values = {
        "label": "Sales region",
        "is_multi_value_required": False,
        "default_value": "Asia",
        "choices": ChoiceSet(["Asia", "Europe"]),
        "order": OrderPolicy.MANUAL,
    }
    values.update(overrides)
    return FieldDefinition(**values)


def test_valid_definition_has_no_errors() -> None:
    assert validate_definition(_valid_definition(), []) == {}


def test_all_failures_are_reported_together() -> None:
    definition = FieldDefinition(
        label="   ",
        is_multi_value_required=True,
        choices=ChoiceSet(["Asia"]),
    )

    errors = validate_definition(definition, [])

    assert errors == {
        "label": DefinitionError.MISSING_LABEL,
        "default_value": DefinitionError.MISSING_DEFAULT_VALUE,
        "order": DefinitionError.MISSING_ORDER,
        "choices": DefinitionError.MISSING_CHOICE_SELECTION,
    }


def test_selection_only_checked_when_required() -> None:
    optional = _valid_definition(is_multi_value_required=False)
    required = _valid_definition(is_multi_value_required=True)

    assert validate_definition(optional, []) == {}
    assert validate_definition(required, ["Europe"]) == {}
    assert validate_definition(required, []) == {
        "choices": DefinitionError.MISSING_CHOICE_SELECTION
    }


@pytest.mark.parametrize("removed,expected_default", [(["Asia"], ""), (["Europe"], "Asia")])
def test_remove_choices_resets_default_only_when_removed(removed, expected_default) -> None:
    definition = _valid_definition()

    definition.remove_choices(removed)

    assert definition.default_value == expected_default


def test_committed_snapshot_is_detached_from_definition() -> None:
    definition = _valid_definition()

    snapshot = CommittedDefinition.capture(definition, ["Europe"])
    definition.choices.add("Africa")
    definition.label = "Changed"

    assert snapshot.choices == ("Asia", "Europe")
    assert snapshot.label == "Sales region"
    assert snapshot.selected_choices == ("Europe",)


def test_payload_is_json_ready() -> None:
    snapshot = CommittedDefinition.capture(_valid_definition(), ["Europe"])

    payload = json.loads(json.dumps(snapshot.to_payload()))

    assert payload == {
        "label": "Sales region",
        "is_multi_value_required": False,
        "default_value": "Asia",
        "choices": ["Asia", "Europe"],
        "order": "Manual",
        "selected_choices": ["Europe"],
    }

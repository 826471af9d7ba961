"""Field definition model and the validation run before committing it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from field_builder.choices import ChoiceSet
from field_builder.errors import DefinitionError
from field_builder.ordering import OrderPolicy

LABEL_FIELD = "label"
REQUIRED_FIELD = "is_multi_value_required"
DEFAULT_VALUE_FIELD = "default_value"
ORDER_FIELD = "order"
CHOICES_FIELD = "choices"

SCALAR_FIELDS = (LABEL_FIELD, REQUIRED_FIELD, DEFAULT_VALUE_FIELD, ORDER_FIELD)


@dataclass
class FieldDefinition:
    """Mutable definition of a configurable list-valued form field."""

    label: str = ""
    is_multi_value_required: bool = False
    default_value: str = ""
    choices: ChoiceSet = field(default_factory=ChoiceSet)
    order: Optional[OrderPolicy] = None

    def remove_choices(self, values: Iterable[str]) -> Tuple[str, ...]:
        """Remove ``values`` and reset the default if it was one of them."""

        removed = tuple(self.choices.remove_many(values))
        if self.default_value in removed:
            self.default_value = ""
        return removed


@dataclass(frozen=True)
class CommittedDefinition:
    """Immutable snapshot handed to the persistence sink on save."""

    label: str
    is_multi_value_required: bool
    default_value: str
    choices: Tuple[str, ...]
    order: Optional[OrderPolicy]
    selected_choices: Tuple[str, ...]

    @classmethod
    def capture(
        cls, definition: FieldDefinition, selection: Iterable[str]
    ) -> "CommittedDefinition":
        return cls(
            label=definition.label,
            is_multi_value_required=definition.is_multi_value_required,
            default_value=definition.default_value,
            choices=definition.choices.values,
            order=definition.order,
            selected_choices=tuple(selection),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping of the snapshot."""

        return {
            LABEL_FIELD: self.label,
            REQUIRED_FIELD: self.is_multi_value_required,
            DEFAULT_VALUE_FIELD: self.default_value,
            CHOICES_FIELD: list(self.choices),
            ORDER_FIELD: self.order.value if self.order is not None else "",
            "selected_choices": list(self.selected_choices),
        }


def validate_definition(
    definition: FieldDefinition, selection: Iterable[str]
) -> Dict[str, DefinitionError]:
    """Return every problem with ``definition`` keyed by field name.

    All checks run independently so the caller can show each problem at
    once. An empty mapping means the definition can be committed.
    """

    errors: Dict[str, DefinitionError] = {}
    if not definition.label.strip():
        errors[LABEL_FIELD] = DefinitionError.MISSING_LABEL
    if not definition.default_value.strip():
        errors[DEFAULT_VALUE_FIELD] = DefinitionError.MISSING_DEFAULT_VALUE
    if definition.order is None:
        errors[ORDER_FIELD] = DefinitionError.MISSING_ORDER
    if definition.is_multi_value_required and not any(True for _ in selection):
        errors[CHOICES_FIELD] = DefinitionError.MISSING_CHOICE_SELECTION
    return errors


__all__ = [
    "CHOICES_FIELD",
    "CommittedDefinition",
    "DEFAULT_VALUE_FIELD",
    "FieldDefinition",
    "LABEL_FIELD",
    "ORDER_FIELD",
    "REQUIRED_FIELD",
    "SCALAR_FIELDS",
    "validate_definition",
]

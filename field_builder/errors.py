"""Error taxonomy shared by the choice set and the field definition."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class DefinitionError(str, Enum):
    """Problems reported when validating a definition on save."""

    MISSING_LABEL = "MissingLabel"
    MISSING_DEFAULT_VALUE = "MissingDefaultValue"
    MISSING_ORDER = "MissingOrder"
    MISSING_CHOICE_SELECTION = "MissingChoiceSelection"


class ChoiceError(str, Enum):
    """Problems reported when adding a new choice."""

    EMPTY_CHOICE = "EmptyChoice"
    DUPLICATE_CHOICE = "DuplicateChoice"


ERROR_MESSAGES: Dict[Enum, str] = {
    DefinitionError.MISSING_LABEL: "Label is required.",
    DefinitionError.MISSING_DEFAULT_VALUE: "Default Value is required.",
    DefinitionError.MISSING_ORDER: "Order is required.",
    DefinitionError.MISSING_CHOICE_SELECTION: (
        'At least one choice is required when "A Value is required" is checked.'
    ),
    ChoiceError.EMPTY_CHOICE: "Choice cannot be empty.",
    ChoiceError.DUPLICATE_CHOICE: "Choice already exists.",
}


def error_message(code: Enum) -> str:
    """Return the user-facing text for ``code``."""

    return ERROR_MESSAGES.get(code, str(getattr(code, "value", code)))


class ChoiceEntryError(ValueError):
    """Raised by :meth:`ChoiceSet.add` when a value cannot be added."""

    def __init__(self, code: ChoiceError, value: str = "") -> None:
        super().__init__(error_message(code))
        self.code = code
        self.value = value


__all__ = [
    "ChoiceEntryError",
    "ChoiceError",
    "DefinitionError",
    "ERROR_MESSAGES",
    "error_message",
]

"""Default values shared between the editor session and the page."""

from __future__ import annotations

from typing import List

DEFAULT_PAGE_TITLE = "Field Builder"
DEFAULT_PAGE_ICON = "🧱"
DEFAULT_PAGE_SUBTITLE = "Configure a list-valued field, its choices and their order."
DEFAULT_SEED_CHOICES: tuple[str, ...] = (
    "Asia",
    "Australia",
    "Europe",
    "Americas",
    "Africa",
)
DEFAULT_SEED_LABEL = ""
DEFAULT_LOG_LEVEL = "INFO"

LABEL_PLACEHOLDER = "Sales region"
DEFAULT_VALUE_PLACEHOLDER = "Select a default value"
ORDER_PLACEHOLDER = "Select an order"
CHOICES_PICKER_LABEL = "Select choices..."
SEARCH_PLACEHOLDER = "Search choices..."
NEW_CHOICE_PLACEHOLDER = "Add a new choice"
REQUIRED_CHECKBOX_LABEL = "A Value is required"
SAVE_SUCCESS_MESSAGE = "Changes saved successfully!"


def seed_choices_list() -> List[str]:
    """Return a mutable list of the default seed choices."""

    return list(DEFAULT_SEED_CHOICES)

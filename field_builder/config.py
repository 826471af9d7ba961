"""Runtime settings for the field builder, read from Streamlit secrets."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, List, Optional

from field_builder.ordering import OrderPolicy, parse_order_policy
from field_builder.schema_defaults import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_SEED_LABEL,
    seed_choices_list,
)

SETTINGS_SECTION = "field_builder"

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    """Seed state and logging options for an editor session."""

    seed_choices: List[str] = field(default_factory=seed_choices_list)
    seed_label: str = DEFAULT_SEED_LABEL
    seed_order: Optional[OrderPolicy] = None
    log_level: str = DEFAULT_LOG_LEVEL


def _clean_choices(value: Any) -> List[str]:
    """Return trimmed, unique, non-empty strings from ``value``."""

    if not isinstance(value, (list, tuple)):
        return []
    cleaned: List[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        trimmed = item.strip()
        if trimmed and trimmed not in cleaned:
            cleaned.append(trimmed)
    return cleaned


def load_settings(section: Optional[Mapping] = None) -> EditorSettings:
    """Build :class:`EditorSettings` from a secrets ``section``.

    Missing or malformed entries fall back to the defaults, so an absent
    ``[field_builder]`` table yields the stock configuration.
    """

    settings = EditorSettings()
    if not isinstance(section, Mapping):
        return settings

    choices = _clean_choices(section.get("seed_choices"))
    if choices:
        settings.seed_choices = choices

    label = section.get("seed_label")
    if isinstance(label, str):
        settings.seed_label = label

    try:
        settings.seed_order = parse_order_policy(section.get("seed_order"))
    except ValueError:
        logger.warning("Ignoring unknown seed_order %r", section.get("seed_order"))
        settings.seed_order = None

    level = section.get("log_level")
    if isinstance(level, str) and level.strip():
        settings.log_level = level.strip().upper()

    return settings


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Install a basic handler for the application loggers."""

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("field_builder").setLevel(numeric_level)

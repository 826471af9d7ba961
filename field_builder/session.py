"""Editor session controller for a single field definition.

The session owns every piece of mutable editor state: the definition being
edited, the chosen subset of its choices, the pending "new choice" entry, the
search query, the picker visibility, the active drag and the validation
outcome. The page layer only reads :attr:`EditorSession.state` and calls the
command methods; each command documents the full set of state it changes.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from field_builder.choices import ChoiceSet, SelectionTracker
from field_builder.config import EditorSettings
from field_builder.drag_reorder import DragReorder, drag_enabled
from field_builder.errors import ChoiceEntryError, ChoiceError, DefinitionError, error_message
from field_builder.field_definition import (
    DEFAULT_VALUE_FIELD,
    LABEL_FIELD,
    ORDER_FIELD,
    REQUIRED_FIELD,
    CommittedDefinition,
    FieldDefinition,
    validate_definition,
)
from field_builder.ordering import OrderPolicy, apply_order, parse_order_policy, visible_choices

logger = logging.getLogger(__name__)

PersistenceSink = Callable[[CommittedDefinition], Any]


def log_definition_sink(definition: CommittedDefinition) -> None:
    """Default sink: log the committed payload."""

    logger.info("Saving form data: %s", json.dumps(definition.to_payload(), ensure_ascii=False))


@dataclass(frozen=True)
class EditorState:
    """Read-only projection of an :class:`EditorSession`."""

    label: str
    is_multi_value_required: bool
    default_value: str
    order_policy: Optional[OrderPolicy]
    choices: Tuple[str, ...]
    visible_choices: Tuple[str, ...]
    selected_choices: Tuple[str, ...]
    pending_choice_text: str
    pending_choice_error: Optional[ChoiceError]
    search_query: str
    is_picker_open: bool
    errors: Dict[str, DefinitionError] = field(default_factory=dict)
    is_saved: bool = False
    drag_source_index: Optional[int] = None

    @property
    def has_no_results(self) -> bool:
        """``True`` when the picker must show its "no results" state."""

        return not self.visible_choices

    @property
    def is_drag_enabled(self) -> bool:
        return drag_enabled(self.order_policy)

    def error_messages(self) -> Dict[str, str]:
        """Return definition errors as user-facing text keyed by field."""

        return {name: error_message(code) for name, code in self.errors.items()}

    @property
    def pending_choice_message(self) -> str:
        if self.pending_choice_error is None:
            return ""
        return error_message(self.pending_choice_error)


class EditorSession:
    """Controller composing the field definition with its transient UI state."""

    def __init__(
        self,
        settings: Optional[EditorSettings] = None,
        sink: Optional[PersistenceSink] = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self._sink: PersistenceSink = sink or log_definition_sink
        self.last_committed: Optional[CommittedDefinition] = None
        self._reset()

    def _seed_definition(self) -> FieldDefinition:
        return FieldDefinition(
            label=self.settings.seed_label,
            choices=ChoiceSet(self.settings.seed_choices),
            order=self.settings.seed_order,
        )

    def _reset(self) -> None:
        self.definition = self._seed_definition()
        self.selection = SelectionTracker()
        self.drag = DragReorder()
        self.pending_choice_text = ""
        self.pending_choice_error: Optional[ChoiceError] = None
        self.search_query = ""
        self.is_picker_open = False
        self.errors: Dict[str, DefinitionError] = {}
        self.is_saved = False

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def ordered_choices(self) -> List[str]:
        return apply_order(self.definition.choices, self.definition.order)

    def visible_choices(self) -> List[str]:
        return visible_choices(self.ordered_choices(), self.search_query)

    @property
    def state(self) -> EditorState:
        definition = self.definition
        return EditorState(
            label=definition.label,
            is_multi_value_required=definition.is_multi_value_required,
            default_value=definition.default_value,
            order_policy=definition.order,
            choices=definition.choices.values,
            visible_choices=tuple(self.visible_choices()),
            selected_choices=self.selection.values,
            pending_choice_text=self.pending_choice_text,
            pending_choice_error=self.pending_choice_error,
            search_query=self.search_query,
            is_picker_open=self.is_picker_open,
            errors=dict(self.errors),
            is_saved=self.is_saved,
            drag_source_index=self.drag.source_index,
        )

    # ------------------------------------------------------------------
    # Scalar fields
    # ------------------------------------------------------------------
    def edit_scalar_field(self, name: str, value: Any) -> None:
        """Update one scalar field of the definition.

        Sets ``is_saved`` to ``False``. Existing definition errors stay until
        the next :meth:`save`. Raises ``KeyError`` for unknown field names and
        ``ValueError`` for an unknown order or a default outside the choices.
        """

        definition = self.definition
        if name == LABEL_FIELD:
            definition.label = "" if value is None else str(value)
        elif name == REQUIRED_FIELD:
            definition.is_multi_value_required = bool(value)
        elif name == DEFAULT_VALUE_FIELD:
            text = "" if value is None else str(value)
            if text and text not in definition.choices:
                raise ValueError(f"Default value {text!r} is not one of the choices.")
            definition.default_value = text
        elif name == ORDER_FIELD:
            definition.order = parse_order_policy(value)
        else:
            raise KeyError(name)
        self.is_saved = False
        logger.debug("Edited %s", name)

    # ------------------------------------------------------------------
    # Choice entry
    # ------------------------------------------------------------------
    def set_pending_choice(self, text: str) -> None:
        """Record the text typed into the new-choice box."""

        self.pending_choice_text = text or ""

    def add_choice(self, text: Optional[str] = None) -> bool:
        """Add the pending (or given) text as a new choice.

        On success the choice is appended, the pending text and its error are
        cleared and ``is_saved`` becomes ``False``. On failure the choice set
        is unchanged and ``pending_choice_error`` holds the reason.
        """

        if text is not None:
            self.pending_choice_text = text
        try:
            self.definition.choices.add(self.pending_choice_text)
        except ChoiceEntryError as error:
            self.pending_choice_error = error.code
            logger.debug("Rejected choice %r: %s", self.pending_choice_text, error.code.value)
            return False
        self.pending_choice_text = ""
        self.pending_choice_error = None
        self.is_saved = False
        return True

    def cancel_pending_choice(self) -> None:
        """Clear the pending text and its error; choices are untouched."""

        self.pending_choice_text = ""
        self.pending_choice_error = None

    # ------------------------------------------------------------------
    # Selection and removal
    # ------------------------------------------------------------------
    def toggle_choice_selection(self, value: str) -> bool:
        """Select or deselect ``value`` and return whether it is now selected.

        Values that are not current choices are ignored. A toggle sets
        ``is_saved`` to ``False``.
        """

        if value not in self.definition.choices:
            logger.debug("Ignoring selection of unknown choice %r", value)
            return False
        selected = self.selection.toggle(value)
        self.is_saved = False
        return selected

    def remove_choices(self, values: Iterable[str]) -> Tuple[str, ...]:
        """Remove ``values`` from the choices.

        Removed values leave the selection, and the default value resets to
        ``""`` when it was removed. ``is_saved`` becomes ``False`` when
        anything was removed.
        """

        removed = self.definition.remove_choices(values)
        if removed:
            self.selection.discard(removed)
            self.is_saved = False
        return removed

    def remove_selected_choices(self) -> Tuple[str, ...]:
        """Remove every selected choice and clear the selection."""

        if not self.selection:
            return ()
        removed = self.remove_choices(self.selection.values)
        self.selection.remove_all()
        return removed

    # ------------------------------------------------------------------
    # Picker, search and drag
    # ------------------------------------------------------------------
    def set_search_query(self, text: str) -> None:
        self.search_query = text or ""

    def toggle_picker(self, is_open: Optional[bool] = None) -> bool:
        """Open, close or flip the choice picker and return the new state."""

        self.is_picker_open = (not self.is_picker_open) if is_open is None else bool(is_open)
        return self.is_picker_open

    def pointer_outside_picker(self) -> None:
        """Handle pointer activity outside the picker surface."""

        self.toggle_picker(False)

    def begin_drag(self, index: int) -> bool:
        """Start dragging the visible choice at ``index``; manual order only."""

        return self.drag.begin(index, self.definition.order)

    def cancel_drag(self) -> None:
        self.drag.cancel()

    def drop_at(self, index: int) -> bool:
        """Drop the dragged choice on the visible position ``index``.

        Clears the drag state. When a move happens ``is_saved`` becomes
        ``False``.
        """

        moved = self.drag.drop(
            index,
            self.visible_choices(),
            self.definition.choices,
            self.definition.order,
        )
        if moved:
            self.is_saved = False
        return moved

    # ------------------------------------------------------------------
    # Commit and discard
    # ------------------------------------------------------------------
    def save(self) -> Optional[CommittedDefinition]:
        """Validate and commit the definition.

        Valid: errors are cleared, the snapshot goes to the sink and
        ``is_saved`` becomes ``True``. Invalid: ``errors`` holds every
        problem, ``is_saved`` is ``False`` and ``None`` is returned.
        """

        errors = validate_definition(self.definition, self.selection)
        if errors:
            self.errors = errors
            self.is_saved = False
            logger.debug("Save rejected: %s", ", ".join(code.value for code in errors.values()))
            return None

        self.errors = {}
        snapshot = CommittedDefinition.capture(self.definition, self.selection)
        self.is_saved = False
        self._sink(snapshot)
        self.last_committed = snapshot
        self.is_saved = True
        return snapshot

    def discard(self) -> None:
        """Reset everything to the seed state; this is not an undo."""

        self._reset()
        logger.debug("Discarded editor changes")


__all__ = [
    "EditorSession",
    "EditorState",
    "PersistenceSink",
    "log_definition_sink",
]

"""Translate drag-and-drop gestures on the displayed choices into reorders."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from field_builder.choices import ChoiceSet
from field_builder.ordering import OrderPolicy

logger = logging.getLogger(__name__)


def drag_enabled(policy: Optional[OrderPolicy]) -> bool:
    """Return ``True`` when ``policy`` allows manual reordering."""

    return policy is OrderPolicy.MANUAL


class DragReorder:
    """Tracks the item being dragged within the current view.

    Indices refer to the rendered (ordered and filtered) view. On drop both
    endpoints are resolved to their values and looked up in the canonical
    order, so a filtered view still moves the right items.
    """

    def __init__(self) -> None:
        self.source_index: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.source_index is not None

    def begin(self, source_index: int, policy: Optional[OrderPolicy]) -> bool:
        """Start dragging the item at ``source_index``; ignored unless manual."""

        if not drag_enabled(policy):
            self.source_index = None
            return False
        self.source_index = source_index
        return True

    def cancel(self) -> None:
        self.source_index = None

    def drop(
        self,
        target_index: int,
        view: Sequence[str],
        choices: ChoiceSet,
        policy: Optional[OrderPolicy],
    ) -> bool:
        """Move the dragged item onto ``target_index`` and report a change.

        The active source index is cleared whether or not anything moved.
        """

        source_index = self.source_index
        self.source_index = None
        if source_index is None or source_index == target_index:
            return False
        if not drag_enabled(policy):
            return False
        if not (0 <= source_index < len(view) and 0 <= target_index < len(view)):
            logger.debug("Ignoring drop outside the view: %s -> %s", source_index, target_index)
            return False

        source_value = view[source_index]
        target_value = view[target_index]
        if source_value not in choices or target_value not in choices:
            return False

        reordered = list(choices)
        moved = reordered.pop(choices.index(source_value))
        reordered.insert(choices.index(target_value), moved)
        choices.permute(reordered)
        logger.debug("Moved choice %r to position %d", moved, reordered.index(moved))
        return True


__all__ = ["DragReorder", "drag_enabled"]

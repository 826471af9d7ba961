"""Tests for drag-and-drop reordering."""

from __future__ import annotations

import pytest

from field_builder.choices import ChoiceSet
from field_builder.drag_reorder import DragReorder, drag_enabled
from field_builder.ordering import OrderPolicy, visible_choices

SEED = ["Asia", "Australia", "Europe", "Americas", "Africa"]


def _drag(source: int, target: int, choices: ChoiceSet, view=None) -> bool:
    drag = DragReorder()
    drag.begin(source, OrderPolicy.MANUAL)
    return drag.drop(target, list(view or choices), choices, OrderPolicy.MANUAL)


@pytest.mark.parametrize(
    "source,target,expected",
    [
        (0, 2, ["Australia", "Europe", "Asia", "Americas", "Africa"]),
        (4, 0, ["Africa", "Asia", "Australia", "Europe", "Americas"]),
        (1, 4, ["Asia", "Europe", "Americas", "Africa", "Australia"]),
    ],
)
def test_drop_moves_item_to_target(source, target, expected) -> None:
    choices = ChoiceSet(SEED)

    assert _drag(source, target, choices) is True
    assert list(choices) == expected


def test_drop_on_same_index_is_noop() -> None:
    choices = ChoiceSet(SEED)

    assert _drag(2, 2, choices) is False
    assert list(choices) == SEED


def test_drop_without_active_source_is_noop() -> None:
    choices = ChoiceSet(SEED)
    drag = DragReorder()

    assert drag.drop(1, SEED, choices, OrderPolicy.MANUAL) is False
    assert list(choices) == SEED


def test_drop_always_clears_source() -> None:
    choices = ChoiceSet(SEED)
    drag = DragReorder()

    drag.begin(1, OrderPolicy.MANUAL)
    drag.drop(1, SEED, choices, OrderPolicy.MANUAL)
    assert drag.source_index is None

    drag.begin(1, OrderPolicy.MANUAL)
    drag.drop(3, SEED, choices, OrderPolicy.MANUAL)
    assert drag.source_index is None


def test_drop_outside_view_is_noop() -> None:
    choices = ChoiceSet(SEED)

    assert _drag(0, 9, choices) is False
    assert list(choices) == SEED


def test_cancel_leaves_choices_untouched() -> None:
    choices = ChoiceSet(SEED)
    drag = DragReorder()

    drag.begin(3, OrderPolicy.MANUAL)
    drag.cancel()

    assert not drag.is_active
    assert drag.drop(0, SEED, choices, OrderPolicy.MANUAL) is False
    assert list(choices) == SEED


@pytest.mark.parametrize("policy", [OrderPolicy.ALPHABETICAL, None])
def test_drag_disabled_outside_manual_order(policy) -> None:
    choices = ChoiceSet(SEED)
    drag = DragReorder()

    assert drag_enabled(policy) is False
    assert drag.begin(0, policy) is False
    assert drag.drop(2, SEED, choices, policy) is False
    assert list(choices) == SEED


def test_filtered_view_resolves_indices_by_value() -> None:
    choices = ChoiceSet(SEED)
    view = visible_choices(list(choices), "ri")

    assert view == ["Americas", "Africa"]
    assert _drag(1, 0, choices, view=view) is True
    assert list(choices) == ["Asia", "Australia", "Europe", "Africa", "Americas"]

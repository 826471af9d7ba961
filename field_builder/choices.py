"""Choice collection and selection tracking for a list-valued field."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Iterator, List, Sequence, Tuple

from field_builder.errors import ChoiceEntryError, ChoiceError

logger = logging.getLogger(__name__)


class ChoiceSet:
    """Ordered collection of distinct choice strings.

    The stored sequence is the canonical *manual* order. Display orderings
    such as alphabetical sorting are computed from it and never written back.
    Uniqueness is exact and case-sensitive.
    """

    def __init__(self, values: Iterable[str] = ()) -> None:
        self._values: List[str] = []
        for value in values:
            trimmed = str(value).strip()
            if trimmed and trimmed not in self._values:
                self._values.append(trimmed)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __repr__(self) -> str:
        return f"ChoiceSet({self._values!r})"

    @property
    def values(self) -> Tuple[str, ...]:
        """Return the manual order as an immutable tuple."""

        return tuple(self._values)

    def index(self, value: str) -> int:
        """Return the canonical position of ``value``."""

        return self._values.index(value)

    def add(self, value: str) -> str:
        """Append ``value`` after trimming it and return the stored text.

        Raises :class:`ChoiceEntryError` with ``EMPTY_CHOICE`` when nothing is
        left after trimming, or ``DUPLICATE_CHOICE`` when the value exists.
        The collection is unchanged when an error is raised.
        """

        trimmed = (value or "").strip()
        if not trimmed:
            raise ChoiceEntryError(ChoiceError.EMPTY_CHOICE, trimmed)
        if trimmed in self._values:
            raise ChoiceEntryError(ChoiceError.DUPLICATE_CHOICE, trimmed)
        self._values.append(trimmed)
        logger.debug("Added choice %r", trimmed)
        return trimmed

    def remove_many(self, values: Iterable[str]) -> List[str]:
        """Remove every listed value and return those that were present."""

        targets = set(values)
        removed = [value for value in self._values if value in targets]
        if removed:
            self._values = [value for value in self._values if value not in targets]
            logger.debug("Removed choices %r", removed)
        return removed

    def permute(self, new_sequence: Sequence[str]) -> None:
        """Replace the manual order with ``new_sequence``.

        ``new_sequence`` must hold exactly the current values.
        """

        candidate = list(new_sequence)
        if Counter(candidate) != Counter(self._values):
            raise ValueError("New order must be a permutation of the current choices.")
        self._values = candidate


class SelectionTracker:
    """Set of chosen values, iterated in the order they were selected."""

    def __init__(self) -> None:
        self._selected: List[str] = []

    def __iter__(self) -> Iterator[str]:
        return iter(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __bool__(self) -> bool:
        return bool(self._selected)

    def __contains__(self, value: object) -> bool:
        return value in self._selected

    @property
    def values(self) -> Tuple[str, ...]:
        return tuple(self._selected)

    def toggle(self, value: str) -> bool:
        """Flip membership of ``value`` and return whether it is now selected."""

        if value in self._selected:
            self._selected.remove(value)
            return False
        self._selected.append(value)
        return True

    def discard(self, values: Iterable[str]) -> None:
        """Drop ``values`` from the selection; absent values are ignored."""

        targets = set(values)
        self._selected = [value for value in self._selected if value not in targets]

    def remove_all(self) -> None:
        self._selected.clear()


__all__ = ["ChoiceSet", "SelectionTracker"]

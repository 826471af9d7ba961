"""Display ordering and search filtering for choice lists."""

from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

NO_RESULTS_MESSAGE = "No choices found."


class OrderPolicy(str, Enum):
    """How choices are sequenced for display."""

    ALPHABETICAL = "Alphabetical"
    MANUAL = "Manual"


ORDER_POLICY_LABELS = {
    OrderPolicy.ALPHABETICAL: "Display choices Alphabetical",
    OrderPolicy.MANUAL: "Manual",
}


def parse_order_policy(value: Union[OrderPolicy, str, None]) -> Optional[OrderPolicy]:
    """Return the policy named by ``value``; blank or ``None`` means unset.

    Raises ``ValueError`` for names that are not a known policy.
    """

    if value is None or isinstance(value, OrderPolicy):
        return value
    text = str(value).strip()
    if not text:
        return None
    for policy in OrderPolicy:
        if text.lower() in {policy.value.lower(), policy.name.lower()}:
            return policy
    raise ValueError(f"Unknown order policy: {value!r}")


def _collation_key(value: str) -> Tuple[str, str, str]:
    """Approximate locale collation: accents are secondary, case is tertiary.

    Lowercase sorts before uppercase on a case-only tie.
    """

    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), unicodedata.normalize("NFD", value).casefold(), value.swapcase()


def apply_order(choices: Iterable[str], policy: Optional[OrderPolicy]) -> List[str]:
    """Return ``choices`` in display order without mutating the source.

    ``ALPHABETICAL`` sorts a copy; ``MANUAL`` and an unset policy keep the
    stored sequence.
    """

    ordered = list(choices)
    if policy is OrderPolicy.ALPHABETICAL:
        ordered.sort(key=_collation_key)
    return ordered


def visible_choices(ordered: Sequence[str], query: str) -> List[str]:
    """Return entries of ``ordered`` containing ``query``, case-insensitively."""

    if not query:
        return list(ordered)
    needle = query.lower()
    return [choice for choice in ordered if needle in choice.lower()]


__all__ = [
    "NO_RESULTS_MESSAGE",
    "ORDER_POLICY_LABELS",
    "OrderPolicy",
    "apply_order",
    "parse_order_policy",
    "visible_choices",
]

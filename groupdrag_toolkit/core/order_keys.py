from __future__ import annotations

"""Order-key arithmetic.

Pure helpers over a collection of rows. Order keys are real numbers that
define one total order across all rows; new positions are obtained by
inserting between two existing neighbours instead of renumbering.
"""

import math
from typing import Iterable, List, Optional

from groupdrag_toolkit.core.models import Row

__all__ = [
    "previous_key",
    "next_key",
    "midpoint",
    "spaced_keys",
    "has_unique_keys",
    "smallest_gap",
    "needs_renormalization",
]


def previous_key(rows: Iterable[Row], key: float) -> Optional[float]:
    """Return the largest order key strictly below *key*, or None."""
    lower = [r.sort for r in rows if r.sort < key]
    return max(lower) if lower else None


def next_key(rows: Iterable[Row], key: float) -> Optional[float]:
    """Return the smallest order key strictly above *key*, or None."""
    higher = [r.sort for r in rows if r.sort > key]
    return min(higher) if higher else None


def midpoint(up: float, down: float) -> float:
    return up + (down - up) / 2


def spaced_keys(up: float, down: float, count: int) -> List[float]:
    """Return *count* evenly spaced keys strictly between *up* and *down*.

    The i-th key (1-based) is ``up + step * i`` with
    ``step = (down - up) / (count + 1)``.
    """
    step = (down - up) / (count + 1)
    return [up + step * i for i in range(1, count + 1)]


def has_unique_keys(rows: Iterable[Row]) -> bool:
    keys = [r.sort for r in rows]
    return len(keys) == len(set(keys))


def smallest_gap(rows: Iterable[Row]) -> float:
    """Return the smallest distance between two adjacent order keys.

    ``math.inf`` for collections with fewer than two rows.
    """
    keys = sorted(r.sort for r in rows)
    if len(keys) < 2:
        return math.inf
    return min(b - a for a, b in zip(keys, keys[1:]))


def needs_renormalization(rows: Iterable[Row], min_gap: float) -> bool:
    """Return True when adjacent keys got closer than *min_gap*.

    Repeated midpoint insertion at the same spot halves the gap each time;
    once it approaches float precision, keys can collide.
    """
    return smallest_gap(rows) < min_gap

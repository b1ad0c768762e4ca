from __future__ import annotations

"""Grouping index: derive groups from the flat row collection and back.

Groups are not stored anywhere; they are recomputed from ``Row.group_key``
whenever needed. All helpers are pure and never mutate their input.
"""

from dataclasses import replace
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from groupdrag_toolkit.core.models import Row, RowGroup

__all__ = [
    "partition",
    "flatten",
    "recompute_group_sizes",
    "find_row",
    "find_group",
    "interleaved_groups",
    "is_contiguous",
]


def partition(rows: Iterable[Row]) -> List[RowGroup]:
    """Split *rows* into groups.

    Members of each group are sorted by ascending order key and groups are
    ordered by the key of their first (header) member.
    """
    buckets: Dict[str, List[Row]] = {}
    for row in sorted(rows, key=lambda r: r.sort):
        buckets.setdefault(row.group_key, []).append(row)
    # dict preserves insertion order, and rows were visited in key order
    return [RowGroup(group_key, members) for group_key, members in buckets.items()]


def flatten(groups: Sequence[RowGroup], renumber_from: Optional[int] = None) -> List[Row]:
    """Concatenate the members of *groups* in list order.

    When *renumber_from* is given, order keys are rewritten to the integer
    sequence ``renumber_from, renumber_from + 1, ...``.
    """
    flat: List[Row] = [row for group in groups for row in group.rows]
    if renumber_from is None:
        return flat
    return [replace(row, sort=renumber_from + i) for i, row in enumerate(flat)]


def recompute_group_sizes(rows: Iterable[Row]) -> List[Row]:
    """Refresh header bookkeeping.

    The first member of every group gets ``group_size`` equal to the group's
    cardinality, every other member gets ``0``. Result is sorted by key.
    """
    result: List[Row] = []
    for group in partition(rows):
        for idx, row in enumerate(group.rows):
            size = group.size if idx == 0 else 0
            result.append(row if row.group_size == size else replace(row, group_size=size))
    return result


def find_row(rows: Iterable[Row], key: str) -> Optional[Row]:
    for row in rows:
        if row.key == key:
            return row
    return None


def find_group(rows: Iterable[Row], group_key: str) -> Optional[RowGroup]:
    """Return the group *group_key*, or None when it has no members."""
    members = sorted((r for r in rows if r.group_key == group_key), key=lambda r: r.sort)
    if not members:
        return None
    return RowGroup(group_key, members)


def interleaved_groups(rows: Iterable[Row]) -> List[Tuple[str, str]]:
    """Return pairs of group keys whose order-key ranges overlap."""
    groups = partition(rows)
    overlapping = []
    for a, b in combinations(groups, 2):
        if a.first_key <= b.last_key and b.first_key <= a.last_key:
            overlapping.append((a.group_key, b.group_key))
    return overlapping


def is_contiguous(rows: Iterable[Row]) -> bool:
    return not interleaved_groups(rows)

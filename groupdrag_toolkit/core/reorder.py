from __future__ import annotations

"""Order-key recomputation for row and group moves.

Single rows are reinserted at the midpoint between the target and its
neighbour. Whole groups are reinserted as a block of evenly spaced keys
between the same two bounds, keeping their internal order. Only the keys of
the moved rows change; every other row keeps its key.

Examples
--------
    rows = reorder(rows, RowRef("1-2"), RowRef("2-1"))
    rows = reorder(rows, GroupRef("group-B"), RowRef("1-1"))
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from groupdrag_toolkit.core.classifier import MoveDirection, MovePlan, classify_move
from groupdrag_toolkit.core.grouping import flatten, partition, recompute_group_sizes
from groupdrag_toolkit.core.models import ItemId, Row
from groupdrag_toolkit.core.order_keys import midpoint, next_key, previous_key, spaced_keys

__all__ = [
    "OrderingPolicy",
    "insertion_bounds",
    "reinsert_row",
    "reinsert_group",
    "apply_plan",
    "reorder",
    "renormalize",
]


@dataclass(frozen=True)
class OrderingPolicy:
    """Synthetic bounds used when a move reaches either end of the table.

    Attributes
    ----------
    head_floor
        Lower bound used when nothing precedes the target.
    row_tail_gap
        Distance past the target used as upper bound for a single row when
        nothing follows it. Groups use ``member_count + 1`` instead.
    min_gap
        Adjacent keys closer than this make a renormalization advisable.
    renumber_start
        First key assigned by :func:`renormalize`.
    """

    head_floor: float = 0.0
    row_tail_gap: float = 2.0
    min_gap: float = 1e-9
    renumber_start: int = 1

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "OrderingPolicy":
        data = dict(data or {})
        defaults = cls()
        return cls(
            head_floor=float(data.get("head_floor", defaults.head_floor)),
            row_tail_gap=float(data.get("row_tail_gap", defaults.row_tail_gap)),
            min_gap=float(data.get("min_gap", defaults.min_gap)),
            renumber_start=int(data.get("renumber_start", defaults.renumber_start)),
        )


DEFAULT_POLICY = OrderingPolicy()


def insertion_bounds(
    rows: Sequence[Row],
    boundary_key: float,
    direction: MoveDirection,
    tail_gap: float,
    policy: OrderingPolicy = DEFAULT_POLICY,
) -> Tuple[float, float]:
    """Return the ``(up, down)`` keys the moved rows are inserted between.

    Going up, the boundary is ``down`` and ``up`` is its predecessor. Going
    down, the boundary is ``up`` and ``down`` is its successor.
    """
    if direction is MoveDirection.UP:
        down = boundary_key
        up = previous_key(rows, down)
        if up is None:
            # Keep the floor strictly below the first key even for keys <= floor.
            up = policy.head_floor if down > policy.head_floor else down - 1
        return up, down
    up = boundary_key
    down = next_key(rows, up)
    if down is None:
        down = up + tail_gap
    return up, down


def reinsert_row(
    rows: Sequence[Row],
    row_key: str,
    boundary_key: float,
    direction: MoveDirection,
    group_key: Optional[str] = None,
    policy: OrderingPolicy = DEFAULT_POLICY,
) -> List[Row]:
    """Give row *row_key* the midpoint key next to *boundary_key*.

    When *group_key* is given the row also joins that group.
    """
    up, down = insertion_bounds(rows, boundary_key, direction, policy.row_tail_gap, policy)
    new_key = midpoint(up, down)
    result = []
    for row in rows:
        if row.key == row_key:
            changes: Dict[str, Any] = {"sort": new_key}
            if group_key is not None:
                changes["group_key"] = group_key
            row = replace(row, **changes)
        result.append(row)
    return result


def reinsert_group(
    rows: Sequence[Row],
    group_key: str,
    boundary_key: float,
    direction: MoveDirection,
    policy: OrderingPolicy = DEFAULT_POLICY,
) -> List[Row]:
    """Move every member of *group_key* next to *boundary_key* as a block.

    Members keep their relative order and receive evenly spaced keys.
    """
    members = sorted((r for r in rows if r.group_key == group_key), key=lambda r: r.sort)
    count = len(members)
    if count == 0:
        return list(rows)
    up, down = insertion_bounds(rows, boundary_key, direction, count + 1, policy)
    new_keys = {row.key: key for row, key in zip(members, spaced_keys(up, down, count))}
    return [replace(r, sort=new_keys[r.key]) if r.key in new_keys else r for r in rows]


def apply_plan(rows: Sequence[Row], plan: MovePlan, policy: OrderingPolicy = DEFAULT_POLICY) -> List[Row]:
    """Apply a classified move and refresh header bookkeeping."""
    if plan.is_group_move:
        moved = reinsert_group(rows, plan.active.group_key, plan.boundary_key, plan.direction, policy)
    else:
        moved = reinsert_row(
            rows,
            plan.active.key,
            plan.boundary_key,
            plan.direction,
            group_key=plan.target_group_key,
            policy=policy,
        )
    return recompute_group_sizes(moved)


def reorder(
    rows: Sequence[Row],
    active_id: ItemId,
    over_id: ItemId,
    policy: Optional[OrderingPolicy] = None,
) -> List[Row]:
    """Move *active_id* onto *over_id* and return the new collection.

    The result is sorted by order key with group sizes recomputed. If the
    pair does not describe a move (same item, unknown id, equal keys) the
    input rows are returned unchanged.
    """
    plan = classify_move(rows, active_id, over_id)
    if plan is None:
        return list(rows)
    return apply_plan(rows, plan, policy or DEFAULT_POLICY)


def renormalize(rows: Sequence[Row], start: int = DEFAULT_POLICY.renumber_start) -> List[Row]:
    """Rewrite all keys to ``start, start + 1, ...`` keeping the current order.

    Explicit maintenance pass for when repeated insertions have squeezed
    adjacent keys together. Never run implicitly by :func:`reorder`.
    """
    return recompute_group_sizes(flatten(partition(rows), renumber_from=start))

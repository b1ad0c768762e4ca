from __future__ import annotations

"""Move classification.

Turns an (active, over) pair of item ids into a :class:`MovePlan`: which rows
move, in which direction, and which existing order key they are inserted
next to. Returns None whenever the pair does not describe a move.
"""

from dataclasses import dataclass
from enum import Enum
import logging
from typing import List, Optional, Sequence

from groupdrag_toolkit.core.grouping import find_group, find_row
from groupdrag_toolkit.core.models import GroupRef, ItemId, Row, RowGroup, RowRef

__all__ = ["MoveDirection", "MovePlan", "classify_move"]

logger = logging.getLogger(__name__)


class MoveDirection(str, Enum):
    UP = "up"  # toward lower order keys
    DOWN = "down"  # toward higher order keys


@dataclass(frozen=True)
class MovePlan:
    """Resolved move request.

    Attributes
    ----------
    active
        Id of the dragged item.
    target
        Id of the item the drag ended over, after resolution (a group drag
        over a row targets the row's whole group).
    direction
        Movement direction derived from the first keys of both items.
    active_key
        Representative key of the dragged item (first member for groups).
    boundary_key
        Key of the target row the moved rows are inserted next to: the
        target's first key going up, its last key going down.
    moving
        Rows whose keys will be rewritten, in current order.
    target_group_key
        Group of the boundary row.
    """

    active: ItemId
    target: ItemId
    direction: MoveDirection
    active_key: float
    boundary_key: float
    moving: List[Row]
    target_group_key: str

    @property
    def is_group_move(self) -> bool:
        return isinstance(self.active, GroupRef)


def _resolve(rows: Sequence[Row], item: ItemId) -> Optional[List[Row]]:
    if isinstance(item, RowRef):
        row = find_row(rows, item.key)
        return [row] if row is not None else None
    if isinstance(item, GroupRef):
        group: Optional[RowGroup] = find_group(rows, item.group_key)
        return group.rows if group is not None else None
    raise TypeError(f"Unsupported item id {item!r}")


def classify_move(rows: Sequence[Row], active: ItemId, over: ItemId) -> Optional[MovePlan]:
    """Classify dragging *active* onto *over*.

    Returns None for same-item drops, unresolvable ids, drops of a group onto
    itself (or onto one of its own rows), drops of a row onto its own group's
    header, and pairs whose keys compare equal.
    """
    if active == over:
        return None

    moving = _resolve(rows, active)
    target_rows = _resolve(rows, over)
    if moving is None or target_rows is None:
        logger.debug("Unresolvable move active=%s over=%s", active, over)
        return None

    target: ItemId = over
    if isinstance(active, GroupRef):
        # Groups move as blocks, so the boundary is always a whole group.
        target_group_key = target_rows[0].group_key
        if target_group_key == active.group_key:
            return None
        if isinstance(over, RowRef):
            target = GroupRef(target_group_key)
            target_rows = _resolve(rows, target) or target_rows
    elif isinstance(over, GroupRef) and over.group_key == moving[0].group_key:
        return None

    active_key = moving[0].sort
    over_key = target_rows[0].sort
    if active_key > over_key:
        direction = MoveDirection.UP
    elif active_key < over_key:
        direction = MoveDirection.DOWN
    else:
        return None

    boundary = target_rows[-1] if direction is MoveDirection.DOWN else target_rows[0]
    plan = MovePlan(
        active=active,
        target=target,
        direction=direction,
        active_key=active_key,
        boundary_key=boundary.sort,
        moving=list(moving),
        target_group_key=boundary.group_key,
    )
    logger.debug(
        "Classified move active=%s target=%s direction=%s boundary=%s",
        active, target, direction.value, plan.boundary_key,
    )
    return plan

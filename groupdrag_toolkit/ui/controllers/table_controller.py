from dataclasses import dataclass
from typing import Any, Callable, List, Literal, Optional

from groupdrag_toolkit.core.grouping import find_group, find_row, partition
from groupdrag_toolkit.core.models import GroupRef, ItemId, Row, RowGroup, RowRef, TableState
from groupdrag_toolkit.core.services.reorder_service import OperationResult, ReorderService
from groupdrag_toolkit.core.services.undo_service import UndoService


@dataclass(frozen=True)
class DropIndicator:
    """Where the drop line is drawn while dragging: before or after a row."""

    row_key: str
    position: Literal["before", "after"]


class GroupedTableController:
    """Controller for coordinating grouped-table drag actions with services.

    This controller keeps the transient drag state (which item is being
    dragged, where the drop indicator sits) and delegates reordering to
    :class:`ReorderService`. It contains no UI toolkit code and does not
    perform I/O.

    Parameters
    ----------
    state : TableState
        The rows the table renders.
    reorder_service : ReorderService, optional
        Service that applies moves. Created from config when omitted.
    undo_service : UndoService, optional
        Service that manages undo/redo snapshots. Created from config when omitted.

    Notes
    -----
    Only one drag is tracked at a time; a new ``begin_drag`` replaces the
    previous active item.
    """

    def __init__(
        self,
        state: TableState,
        reorder_service: Optional[ReorderService] = None,
        undo_service: Optional[UndoService] = None,
    ) -> None:
        self.state: TableState = state
        self.reorder_service: ReorderService = reorder_service or ReorderService()
        self.undo_service: UndoService = undo_service or UndoService()

        # Transient drag state
        self.active_id: Optional[ItemId] = None
        self.indicator: Optional[DropIndicator] = None

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    def _recorded_edit(self, mutate: Callable[[], OperationResult]) -> OperationResult:
        """Execute a mutating operation with pre/post undo snapshots.

        The pre snapshot is dropped again when the operation changed nothing,
        so no-op drops do not create empty undo steps.
        """
        pushed_baseline = self.undo_service.push_snapshot(self.state)
        result = mutate()
        if result.success:
            self.undo_service.push_snapshot(self.state)
        elif pushed_baseline:
            self.undo_service.discard_last()
        return result

    # ---------------------------------------------------------------------------------
    # Table view
    # ---------------------------------------------------------------------------------

    @property
    def rows(self) -> List[Row]:
        """Rows in render order (ascending order key)."""
        return sorted(self.state.rows, key=lambda r: r.sort)

    def groups(self) -> List[RowGroup]:
        return partition(self.state.rows)

    def sortable_ids(self) -> List[ItemId]:
        """Ids registered as drag sources/targets: every group, then every row."""
        ids: List[ItemId] = [GroupRef(g.group_key) for g in self.groups()]
        ids.extend(RowRef(r.key) for r in self.rows)
        return ids

    @staticmethod
    def row_span(row: Row) -> int:
        """Row span of the merged group cells for *row* (0 hides the cell)."""
        return row.group_size or 0

    # ---------------------------------------------------------------------------------
    # Drag session
    # ---------------------------------------------------------------------------------

    def begin_drag(self, active_id: ItemId) -> None:
        self.active_id = active_id
        self.indicator = None

    def drag_over(self, over_id: Optional[ItemId]) -> Optional[DropIndicator]:
        """Update the drop indicator for the item under the pointer.

        Over a group the line goes after the group's last row; over a row it
        goes before that row.
        """
        self.indicator = None
        if isinstance(over_id, GroupRef):
            group = find_group(self.state.rows, over_id.group_key)
            if group is not None:
                self.indicator = DropIndicator(group.rows[-1].key, "after")
        elif isinstance(over_id, RowRef):
            if find_row(self.state.rows, over_id.key) is not None:
                self.indicator = DropIndicator(over_id.key, "before")
        return self.indicator

    def dragged_rows(self) -> List[Row]:
        """Rows shown in the drag overlay, in order."""
        if isinstance(self.active_id, GroupRef):
            group = find_group(self.state.rows, self.active_id.group_key)
            return list(group.rows) if group is not None else []
        if isinstance(self.active_id, RowRef):
            row = find_row(self.state.rows, self.active_id.key)
            return [row] if row is not None else []
        return []

    def is_being_dragged(self, row: Row) -> bool:
        """True when *row* belongs to the item being dragged (hidden in place)."""
        if isinstance(self.active_id, GroupRef):
            return row.group_key == self.active_id.group_key
        if isinstance(self.active_id, RowRef):
            return row.key == self.active_id.key
        return False

    def end_drag(self, over_id: Optional[ItemId]) -> OperationResult:
        """Finish the drag by dropping onto *over_id* (None: dropped nowhere)."""
        active_id = self.active_id
        self.active_id = None
        self.indicator = None
        if active_id is None or over_id is None:
            return OperationResult(False, "No drag in progress.", {"active": active_id, "over": over_id})
        return self._recorded_edit(lambda: self.reorder_service.reorder(self.state, active_id, over_id))

    def cancel_drag(self) -> None:
        self.active_id = None
        self.indicator = None

    # ---------------------------------------------------------------------------------
    # Maintenance and history
    # ---------------------------------------------------------------------------------

    def renormalize(self) -> OperationResult:
        return self._recorded_edit(lambda: self.reorder_service.renormalize(self.state))

    def can_undo(self) -> bool:
        return self.undo_service.can_undo()

    def can_redo(self) -> bool:
        return self.undo_service.can_redo()

    def undo(self) -> bool:
        return self.undo_service.undo(self.state)

    def redo(self) -> bool:
        return self.undo_service.redo(self.state)

    def to_records(self) -> List[dict]:
        return self.state.to_records()

    def __repr__(self) -> str:
        drag: Any = self.active_id or "idle"
        return f"GroupedTableController(rows={len(self.state.rows)}, drag={drag})"

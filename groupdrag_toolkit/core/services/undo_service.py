from __future__ import annotations

"""Undo/redo snapshot management for TableState.

This service is UI-agnostic and performs pure in-memory history tracking of
the row collection. Rows are immutable, so a snapshot is a tuple of the row
objects themselves; restoring assigns a fresh list back to the state.

Design principles
-----------------
- No UI imports and no I/O (filesystem/console).
- Snapshots are immutable once stored.
- Redo stack is cleared on every new snapshot push (standard undo/redo behavior).
- Memory usage controlled by a max_history policy (trim oldest).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from groupdrag_toolkit.config import ConfigManager
from groupdrag_toolkit.core.models import Row, TableState


@dataclass(frozen=True)
class _Snapshot:
    """Immutable in-memory snapshot of a TableState."""

    rows: Tuple[Row, ...]


class UndoService:
    """Manage undo/redo stacks for :class:`TableState`.

    The service keeps two stacks of immutable snapshots: an undo stack and a
    redo stack. Undo/redo restore the previous/next snapshot into a provided
    TableState instance in place.

    Parameters
    ----------
    max_history : int, optional
        Maximum number of undo snapshots to keep. Read from the ``history``
        config section when omitted (default 50). Values below 1 are coerced
        to 1.

    Examples
    --------
    >>> state = TableState(rows)
    >>> svc = UndoService(max_history=10)
    >>> svc.push_snapshot(state)   # baseline, before a move
    >>> # ... move rows ...
    >>> svc.push_snapshot(state)   # post-move state
    >>> svc.undo(state)            # back to baseline
    True
    """

    def __init__(self, max_history: Optional[int] = None) -> None:
        if max_history is None:
            max_history = ConfigManager().get_history().get("max_history", 50)
        self._max_history: int = max(1, int(max_history))
        self._undo_stack: List[_Snapshot] = []
        self._redo_stack: List[_Snapshot] = []

    # --------------------------------------------------------------------- API

    def push_snapshot(self, state: TableState) -> bool:
        """Capture current rows and push onto the undo stack.

        The redo stack is cleared. If the undo stack exceeds max_history, the
        oldest snapshot is dropped. A snapshot identical to the top of the
        stack is not pushed again; returns False in that case.
        """
        snap = _Snapshot(rows=tuple(state.rows))
        if self._undo_stack and self._undo_stack[-1] == snap:
            return False
        self._undo_stack.append(snap)
        self._redo_stack.clear()
        self._trim(self._undo_stack)
        return True

    def discard_last(self) -> None:
        """Drop the most recent snapshot (a baseline that led to no change)."""
        if self._undo_stack:
            self._undo_stack.pop()

    def undo(self, state: TableState) -> bool:
        """Restore the previous state into the provided state.

        Assumes callers push a snapshot BEFORE mutation (baseline) and AFTER
        mutation (post). Given undo_stack = [..., baseline, post], ``post``
        moves to the redo stack and ``baseline`` is restored.
        """
        if len(self._undo_stack) < 2:
            return False

        post_snap = self._undo_stack.pop()
        baseline_snap = self._undo_stack[-1]
        if not self._restore(state, baseline_snap):
            self._undo_stack.append(post_snap)
            return False

        self._redo_stack.append(post_snap)
        self._trim(self._redo_stack)
        return True

    def redo(self, state: TableState) -> bool:
        """Re-apply a state that was previously undone."""
        if not self._redo_stack:
            return False

        post_snap = self._redo_stack[-1]
        if not self._restore(state, post_snap):
            return False

        self._redo_stack.pop()
        self._undo_stack.append(post_snap)
        self._trim(self._undo_stack)
        return True

    def can_undo(self) -> bool:
        """Return True if an undo operation is currently possible."""
        return len(self._undo_stack) > 1

    def can_redo(self) -> bool:
        """Return True if a redo operation is currently possible."""
        return bool(self._redo_stack)

    def clear(self) -> None:
        """Clear both undo and redo histories."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    # --------------------------------------------------------------- Internals

    def _trim(self, stack: List[_Snapshot]) -> None:
        overflow = len(stack) - self._max_history
        if overflow > 0:
            del stack[0:overflow]

    @staticmethod
    def _restore(state: TableState, snap: _Snapshot) -> bool:
        """Swap the snapshot rows into *state*; False for a malformed snapshot."""
        rows = getattr(snap, "rows", None)
        if not isinstance(rows, tuple) or not all(isinstance(r, Row) for r in rows):
            return False
        state.rows = list(rows)
        return True

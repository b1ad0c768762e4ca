from __future__ import annotations

"""Service layer for drag reordering of grouped rows.

This module provides a UI-agnostic, testable service wrapping the pure
order-key functions of :mod:`groupdrag_toolkit.core.reorder` for callers
that own a :class:`TableState`.

Scope and guarantees:
- Operates purely in-memory on TableState, no file I/O nor UI imports.
- Invalid or meaningless moves return OperationResult(success=False, ...)
  and leave the state untouched, never raise.
- A successful move replaces ``state.rows`` in one assignment.

Examples
--------
Basic usage:

    service = ReorderService()
    result = service.reorder(state, GroupRef("group-B"), RowRef("1-1"))
    if not result.success:
        print(result.message)

"""

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional

from groupdrag_toolkit.config import ConfigManager
from groupdrag_toolkit.core.classifier import classify_move
from groupdrag_toolkit.core.grouping import interleaved_groups
from groupdrag_toolkit.core.models import ItemId, Row, TableState
from groupdrag_toolkit.core.order_keys import has_unique_keys, needs_renormalization
from groupdrag_toolkit.core.reorder import OrderingPolicy, apply_plan, renormalize


__all__ = ["OperationResult", "ReorderService"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Result of a reordering operation.

    Attributes
    ----------
    success
        Whether the operation changed the table.
    message
        Human-readable summary suitable for logs or UI display.
    details
        Optional structured details for diagnostics or caller logic.
    """
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None


class ReorderService:
    """Applies row and group moves to a table state.

    Parameters
    ----------
    policy : OrderingPolicy, optional
        Synthetic bounds and renormalization threshold. Read from the
        ``ordering`` config section when omitted.
    """

    def __init__(self, policy: Optional[OrderingPolicy] = None) -> None:
        if policy is None:
            policy = OrderingPolicy.from_mapping(ConfigManager().get_ordering())
        self.policy: OrderingPolicy = policy

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def reorder(self, state: TableState, active_id: ItemId, over_id: ItemId) -> OperationResult:
        """Move *active_id* onto *over_id*.

        On success ``details`` holds ``direction``, ``changed`` (row key ->
        new order key) and ``renormalize_suggested``.
        """
        logger.info("Edit: reorder active=%s over=%s", active_id, over_id)
        rows = state.rows
        self._check_invariants(rows)

        plan = classify_move(rows, active_id, over_id)
        if plan is None:
            logger.info("Edit noop: reorder active=%s over=%s", active_id, over_id)
            return OperationResult(
                False,
                "Nothing to move.",
                {"active": active_id, "over": over_id},
            )

        new_rows = apply_plan(rows, plan, self.policy)
        before = {row.key: row.sort for row in rows}
        changed = {row.key: row.sort for row in new_rows if before.get(row.key) != row.sort}
        suggest = needs_renormalization(new_rows, self.policy.min_gap)
        if suggest:
            logger.warning(
                "Order keys closer than %g after moving %s; renormalization advised",
                self.policy.min_gap, active_id,
            )

        state.rows = new_rows
        logger.info(
            "Edit OK: reorder active=%s target=%s direction=%s changed=%d",
            active_id, plan.target, plan.direction.value, len(changed),
        )
        noun = "group" if plan.is_group_move else "row"
        return OperationResult(
            True,
            f"Moved {noun} {plan.direction.value}.",
            {
                "active": active_id,
                "target": plan.target,
                "direction": plan.direction.value,
                "changed": changed,
                "renormalize_suggested": suggest,
            },
        )

    def renormalize(self, state: TableState) -> OperationResult:
        """Rewrite every order key to a clean integer sequence."""
        logger.info("Edit: renormalize rows=%d", len(state.rows))
        if not state.rows:
            logger.info("Edit noop: renormalize empty table")
            return OperationResult(False, "Table is empty.", {"rows": 0})

        new_rows = renormalize(state.rows, self.policy.renumber_start)
        state.rows = new_rows
        logger.info("Edit OK: renormalize rows=%d", len(new_rows))
        return OperationResult(True, "Renumbered order keys.", {"rows": len(new_rows)})

    def needs_renormalization(self, state: TableState) -> bool:
        return needs_renormalization(state.rows, self.policy.min_gap)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_invariants(self, rows: List[Row]) -> None:
        """Log invariant violations present in the caller's rows."""
        if not has_unique_keys(rows):
            logger.warning("Duplicate order keys in table; neighbour lookup is ambiguous")
        overlapping = interleaved_groups(rows)
        if overlapping:
            logger.warning("Interleaved groups in table: %s", overlapping)

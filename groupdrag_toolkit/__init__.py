"""Top-level package for GroupDrag Toolkit.

This package hosts the GUI-agnostic order-key logic behind a grouped,
drag-sortable table. Front-ends should only depend on the public API exposed
here rather than importing internal modules directly.
"""

from .core.models import GroupRef, Row, RowRef, TableState  # re-export for convenience
from .core.reorder import OrderingPolicy, renormalize, reorder

__all__: list[str] = [
    "GroupRef",
    "OrderingPolicy",
    "Row",
    "RowRef",
    "TableState",
    "renormalize",
    "reorder",
]

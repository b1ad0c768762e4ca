"""Controllers coordinating UI actions with core services."""

from .table_controller import DropIndicator, GroupedTableController

__all__ = [
    "DropIndicator",
    "GroupedTableController",
]

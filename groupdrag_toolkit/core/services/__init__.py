from __future__ import annotations

"""High-level services operating on a :class:`TableState`."""

from .reorder_service import OperationResult, ReorderService  # noqa: F401
from .undo_service import UndoService  # noqa: F401

__all__: list[str] = [
    "OperationResult",
    "ReorderService",
    "UndoService",
]

from __future__ import annotations

"""Shared data structures used across the GroupDrag Toolkit core.

This package exposes dataclasses and value objects used by services and other
core layers. It is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, controllers, GUI, etc.).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

__all__ = [
    "Row",
    "RowRef",
    "GroupRef",
    "ItemId",
    "RowGroup",
    "TableState",
]


@dataclass(frozen=True)
class Row:
    """A single table row.

    Attributes
    ----------
    key
        Unique row identifier.
    group_key
        Identifier of the group the row belongs to.
    sort
        Order key. Defines the total order of all rows regardless of group.
    group_size
        Header bookkeeping: member count on the group's header row, ``0`` on
        every other member, ``None`` when never computed.
    payload
        Display fields (category, name, count…), opaque to the core.
    """

    key: str
    group_key: str
    sort: float
    group_size: Optional[int] = None
    payload: Mapping[str, Any] = field(default_factory=dict, hash=False)

    @property
    def is_header(self) -> bool:
        return bool(self.group_size)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Row":
        """Build a row from a table record.

        Accepts both ``groupKey``/``groupSize`` and ``group_key``/``group_size``
        spellings; every other field is kept as payload.
        """
        reserved = {"key", "groupKey", "group_key", "sort", "groupSize", "group_size"}
        key = data.get("key")
        group_key = data.get("groupKey", data.get("group_key"))
        sort = data.get("sort")
        if key is None or group_key is None or sort is None:
            raise ValueError(f"Row record requires key, groupKey and sort: {dict(data)!r}")
        group_size = data.get("groupSize", data.get("group_size"))
        payload = {k: v for k, v in data.items() if k not in reserved}
        return cls(
            key=str(key),
            group_key=str(group_key),
            sort=sort,
            group_size=None if group_size is None else int(group_size),
            payload=payload,
        )

    def to_mapping(self) -> Dict[str, Any]:
        """Return the row as a table record (inverse of :meth:`from_mapping`)."""
        record: Dict[str, Any] = dict(self.payload)
        record.update({"key": self.key, "groupKey": self.group_key, "sort": self.sort})
        if self.group_size is not None:
            record["groupSize"] = self.group_size
        return record


@dataclass(frozen=True)
class RowRef:
    """Identifies a single row by its key."""

    key: str

    def __str__(self) -> str:
        return f"row {self.key}"


@dataclass(frozen=True)
class GroupRef:
    """Identifies a whole group by its group key."""

    group_key: str

    def __str__(self) -> str:
        return f"group {self.group_key}"


ItemId = Union[RowRef, GroupRef]


@dataclass(frozen=True)
class RowGroup:
    """Derived view of one group: its members in ascending order-key order."""

    group_key: str
    rows: List[Row]

    @property
    def size(self) -> int:
        return len(self.rows)

    @property
    def header(self) -> Row:
        return self.rows[0]

    @property
    def first_key(self) -> float:
        return self.rows[0].sort

    @property
    def last_key(self) -> float:
        return self.rows[-1].sort


@dataclass
class TableState:
    """The row collection owned by the caller.

    Services never mutate rows in place; they replace ``rows`` with a new
    list in a single assignment.
    """

    rows: List[Row] = field(default_factory=list)

    @classmethod
    def from_records(cls, records) -> "TableState":
        return cls(rows=[Row.from_mapping(r) for r in records])

    def to_records(self) -> List[Dict[str, Any]]:
        return [row.to_mapping() for row in sorted(self.rows, key=lambda r: r.sort)]

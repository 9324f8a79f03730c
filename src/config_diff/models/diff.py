"""Diff models produced by the snapshot differ and consumed by reporting."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class _Absent(Enum):
    """Marker for a path that has no value on one side of a change."""

    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent.ABSENT


def leaf_equal(left: Any, right: Any) -> bool:
    """Compare two leaf values without coercing booleans into numbers.

    Two NaN floats compare equal so an unchanged NaN is never a change.
    """

    if isinstance(left, bool) != isinstance(right, bool):
        return False
    if isinstance(left, float) and isinstance(right, float) and math.isnan(left):
        return math.isnan(right)
    return left == right


class DiffStatus(str, Enum):
    """Classification of a resource between two snapshots."""

    CREATED = "created"
    DELETED = "deleted"
    MODIFIED = "modified"


@dataclass(slots=True, frozen=True)
class ChangeEntry:
    """Old and new value of a single flattened path."""

    old: Any = ABSENT
    new: Any = ABSENT

    def __post_init__(self) -> None:
        if self.old is ABSENT and self.new is ABSENT:
            raise ValueError("A change entry needs at least one present side")
        if self.old is not ABSENT and self.new is not ABSENT and leaf_equal(self.old, self.new):
            raise ValueError(f"Unchanged value cannot be recorded as a change: {self.old!r}")

    @property
    def added(self) -> bool:
        return self.old is ABSENT

    @property
    def removed(self) -> bool:
        return self.new is ABSENT

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.old is not ABSENT:
            payload["old"] = self.old
        if self.new is not ABSENT:
            payload["new"] = self.new
        return payload


@dataclass(slots=True)
class ResourceDiff:
    """Per-resource classification and change set between two snapshots."""

    id: str
    type: str | None = None
    created: bool = False
    deleted: bool = False
    changes: Dict[str, ChangeEntry] = field(default_factory=dict)

    @property
    def status(self) -> DiffStatus:
        if self.created:
            return DiffStatus.CREATED
        if self.deleted:
            return DiffStatus.DELETED
        return DiffStatus.MODIFIED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "status": self.status.value,
            "created": self.created,
            "deleted": self.deleted,
            "changes": {path: entry.to_dict() for path, entry in self.changes.items()},
        }

"""Data models for resource snapshots and the diffs computed between them."""

from .diff import ABSENT, ChangeEntry, DiffStatus, ResourceDiff, leaf_equal
from .snapshot import FlatRecord, RawResource, RejectedRecord, Snapshot

__all__ = [
    "ABSENT",
    "ChangeEntry",
    "DiffStatus",
    "FlatRecord",
    "RawResource",
    "RejectedRecord",
    "ResourceDiff",
    "Snapshot",
    "leaf_equal",
]

"""Compare AWS Config inventory snapshots and report per-resource changes."""

from .engine import SnapshotDiffer, diff_snapshots
from .models import ABSENT, ChangeEntry, ResourceDiff, Snapshot
from .normalization import Flattener, MalformedRecord, SnapshotBuilder, flatten

__all__ = [
    "ABSENT",
    "ChangeEntry",
    "Flattener",
    "MalformedRecord",
    "ResourceDiff",
    "Snapshot",
    "SnapshotBuilder",
    "SnapshotDiffer",
    "diff_snapshots",
    "flatten",
]

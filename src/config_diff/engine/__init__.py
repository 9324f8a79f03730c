"""Snapshot differencing engine."""

from .differ import SnapshotDiffer, diff_snapshots

__all__ = ["SnapshotDiffer", "diff_snapshots"]

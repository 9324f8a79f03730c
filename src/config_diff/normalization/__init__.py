"""Normalization helpers: record flattening and snapshot construction."""

from .flattener import DEFAULT_SEPARATOR, Flattener, flatten
from .snapshot_builder import ID_FIELD, ITEMS_FIELD, MalformedRecord, SnapshotBuilder

__all__ = [
    "DEFAULT_SEPARATOR",
    "Flattener",
    "ID_FIELD",
    "ITEMS_FIELD",
    "MalformedRecord",
    "SnapshotBuilder",
    "flatten",
]

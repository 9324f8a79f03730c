"""Adapter layer package for snapshot retrieval and account identity lookup."""

from .identity import (
    AwsCliIdentityResolver,
    IdentityResolutionFailure,
    IdentityResolver,
    StaticIdentityResolver,
)
from .snapshot_source import (
    LocalSnapshotSource,
    SnapshotDocument,
    SnapshotNotFound,
    SnapshotSource,
    SnapshotSourceError,
)

__all__ = [
    "AwsCliIdentityResolver",
    "IdentityResolutionFailure",
    "IdentityResolver",
    "LocalSnapshotSource",
    "SnapshotDocument",
    "SnapshotNotFound",
    "SnapshotSource",
    "SnapshotSourceError",
    "StaticIdentityResolver",
]

"""Orchestration layer used by the CLI to compare two configuration snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Sequence

from .adapters import (
    IdentityResolutionFailure,
    IdentityResolver,
    SnapshotDocument,
    SnapshotNotFound,
    SnapshotSource,
    SnapshotSourceError,
)
from .engine import SnapshotDiffer
from .models import ResourceDiff, Snapshot
from .normalization import MalformedRecord, SnapshotBuilder
from .observability import get_logger

logger = get_logger("service")


@dataclass(slots=True)
class DiffReport:
    """Result returned by :class:`ReportDiffService` runs."""

    start: date
    end: date
    diffs: List[ResourceDiff]
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def resource_types(self) -> List[str]:
        """Return the distinct types of changed resources in first-seen order."""

        return unique_types(self.diffs)

    def counts_by_status(self) -> dict[str, int]:
        counts: Dict[str, int] = {"created": 0, "deleted": 0, "modified": 0}
        for diff in self.diffs:
            counts[diff.status.value] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "metadata": dict(self.metadata),
            "summary": {
                "total_changed": len(self.diffs),
                "counts": self.counts_by_status(),
                "resource_types": self.resource_types(),
            },
            "diffs": [diff.to_dict() for diff in self.diffs],
        }


def unique_types(diffs: Sequence[ResourceDiff]) -> List[str]:
    seen: Dict[str, None] = {}
    for diff in diffs:
        # Resources without a type have no entry in the types list.
        if diff.type is not None:
            seen.setdefault(str(diff.type), None)
    return list(seen)


SnapshotSourceFactory = Callable[[str], SnapshotSource]


class ReportDiffService:
    """High level service responsible for snapshot retrieval and differencing."""

    def __init__(
        self,
        *,
        identity_resolver: IdentityResolver,
        source_factory: SnapshotSourceFactory,
        snapshot_builder: SnapshotBuilder | None = None,
        differ: SnapshotDiffer | None = None,
    ) -> None:
        self._identity_resolver = identity_resolver
        self._source_factory = source_factory
        self._snapshot_builder = snapshot_builder or SnapshotBuilder()
        self._differ = differ or SnapshotDiffer()

    # ------------------------------------------------------------------
    def compare(self, start: date, end: date) -> DiffReport:
        """Diff the snapshot for ``start`` against the snapshot for ``end``."""

        account_id = self._identity_resolver.resolve()
        source = self._source_factory(account_id)

        logger.info("snapshot.loading", which="old", day=start.isoformat())
        before = self._load(source, start)
        logger.info("snapshot.loading", which="new", day=end.isoformat())
        after = self._load(source, end)

        diffs = self._differ.diff(before, after)

        metadata: dict[str, Any] = {
            "account_id": account_id,
            "start_source": before.source,
            "end_source": after.source,
            "start_resource_count": len(before),
            "end_resource_count": len(after),
            "rejected_records": len(before.rejected) + len(after.rejected),
        }

        return DiffReport(start=start, end=end, diffs=diffs, metadata=metadata)

    # ------------------------------------------------------------------
    def _load(self, source: SnapshotSource, day: date) -> Snapshot:
        document: SnapshotDocument = source.fetch(day)
        snapshot = self._snapshot_builder.build(
            document.content,
            taken_on=day,
            source=document.location,
        )
        logger.info(
            "snapshot.loaded",
            day=day.isoformat(),
            source=document.location,
            resources=len(snapshot),
            rejected=len(snapshot.rejected),
        )
        return snapshot


__all__ = [
    "DiffReport",
    "IdentityResolutionFailure",
    "MalformedRecord",
    "ReportDiffService",
    "SnapshotNotFound",
    "SnapshotSourceError",
    "unique_types",
]

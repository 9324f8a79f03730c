"""Snapshot differencing: match resources by id and collect changed leaf paths."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from ..models import ABSENT, ChangeEntry, FlatRecord, RawResource, ResourceDiff, leaf_equal
from ..normalization import Flattener
from ..observability import get_logger

TYPE_FIELD = "resourceType"

logger = get_logger("differ")


@dataclass(slots=True)
class _PendingPair:
    old: FlatRecord = field(default_factory=dict)
    new: FlatRecord = field(default_factory=dict)


class SnapshotDiffer:
    """Compare two snapshots and report every resource with an observable change."""

    def __init__(self, flattener: Flattener | None = None) -> None:
        self._flattener = flattener or Flattener()

    def diff(
        self,
        before: Mapping[str, RawResource],
        after: Mapping[str, RawResource],
    ) -> List[ResourceDiff]:
        """Return resource diffs in ``before`` order followed by ids new in ``after``."""

        pending = self._pair(before, after)

        diffs: List[ResourceDiff] = []
        for resource_id, pair in pending.items():
            resource_diff = self._compare(resource_id, pair)
            if resource_diff.changes:
                diffs.append(resource_diff)

        logger.debug(
            "diff.completed",
            before=len(before),
            after=len(after),
            resources=len(pending),
            changed=len(diffs),
        )
        return diffs

    # ------------------------------------------------------------------
    def _pair(
        self,
        before: Mapping[str, RawResource],
        after: Mapping[str, RawResource],
    ) -> Dict[str, _PendingPair]:
        pending: Dict[str, _PendingPair] = {}
        for resource_id, record in before.items():
            pending[resource_id] = _PendingPair(old=self._flattener.flatten(record))

        for resource_id, record in after.items():
            flat = self._flattener.flatten(record)
            pair = pending.get(resource_id)
            if pair is None:
                pending[resource_id] = _PendingPair(new=flat)
            else:
                pair.new = flat

        return pending

    def _compare(self, resource_id: str, pair: _PendingPair) -> ResourceDiff:
        old, new = pair.old, pair.new
        if TYPE_FIELD in old:
            resource_type = old[TYPE_FIELD]
        else:
            resource_type = new.get(TYPE_FIELD)

        unmatched = dict(new)
        changes: Dict[str, ChangeEntry] = {}
        for path, old_value in old.items():
            new_value = unmatched.pop(path, ABSENT)
            if new_value is not ABSENT and leaf_equal(old_value, new_value):
                continue
            changes[path] = ChangeEntry(old=old_value, new=new_value)

        for path, new_value in unmatched.items():
            changes[path] = ChangeEntry(old=ABSENT, new=new_value)

        return ResourceDiff(
            id=resource_id,
            type=resource_type,
            created=not old,
            deleted=not new,
            changes=changes,
        )


def diff_snapshots(
    before: Mapping[str, RawResource],
    after: Mapping[str, RawResource],
) -> List[ResourceDiff]:
    """Diff two snapshots with the default flattener."""

    return SnapshotDiffer().diff(before, after)


__all__ = ["SnapshotDiffer", "TYPE_FIELD", "diff_snapshots"]

"""Conversion helpers that turn raw snapshot documents into :class:`Snapshot` models."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping

from ..models import RawResource, RejectedRecord, Snapshot
from ..observability import get_logger

ITEMS_FIELD = "configurationItems"
ID_FIELD = "resourceId"

logger = get_logger("snapshot_builder")


class MalformedRecord(RuntimeError):
    """Raised when a snapshot document or one of its records cannot be matched by id."""

    def __init__(self, reason: str, *, index: int | None = None, source: str | None = None) -> None:
        self.reason = reason
        self.index = index
        self.source = source

        location = ""
        if index is not None:
            location = f" (record {index}"
            location += f" in {source})" if source else ")"
        elif source:
            location = f" (in {source})"
        super().__init__(f"{reason}{location}")


class SnapshotBuilder:
    """Index the resource records of a snapshot document by their identifier."""

    def __init__(
        self,
        *,
        items_field: str = ITEMS_FIELD,
        id_field: str = ID_FIELD,
        strict: bool = True,
    ) -> None:
        self.items_field = items_field
        self.id_field = id_field
        self.strict = strict

    def build(
        self,
        document: Mapping[str, Any] | None,
        *,
        taken_on: date | None = None,
        source: str | None = None,
    ) -> Snapshot:
        """Return a snapshot for ``document``, rejecting records without a usable id."""

        items = self._extract_items(document, source)

        resources: Dict[str, RawResource] = {}
        rejected: List[RejectedRecord] = []
        for index, item in enumerate(items):
            reason = self._validate(item, resources)
            if reason is None:
                resources[item[self.id_field]] = item
                continue

            if self.strict:
                raise MalformedRecord(reason, index=index, source=source)

            logger.warning("snapshot.record_rejected", index=index, reason=reason, source=source)
            rejected.append(RejectedRecord(index=index, reason=reason, record=item))

        return Snapshot(resources=resources, taken_on=taken_on, source=source, rejected=rejected)

    # ------------------------------------------------------------------
    def _extract_items(self, document: Mapping[str, Any] | None, source: str | None) -> List[Any]:
        if document is None:
            return []
        if not isinstance(document, Mapping):
            raise MalformedRecord("Snapshot document must be a mapping", source=source)

        items = document.get(self.items_field)
        if items is None:
            return []
        if not isinstance(items, list):
            raise MalformedRecord(f"'{self.items_field}' must be a list", source=source)
        return items

    def _validate(self, item: Any, resources: Mapping[str, RawResource]) -> str | None:
        if not isinstance(item, Mapping):
            return "Resource record must be a mapping"

        resource_id = item.get(self.id_field)
        if not isinstance(resource_id, str) or not resource_id.strip():
            return f"Resource record has no usable '{self.id_field}'"
        if resource_id in resources:
            return f"Duplicate {self.id_field} '{resource_id}'"
        return None


__all__ = ["ID_FIELD", "ITEMS_FIELD", "MalformedRecord", "SnapshotBuilder"]

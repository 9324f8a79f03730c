"""Snapshot models used by the differ and the snapshot builder."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, List, Optional

RawResource = Mapping[str, Any]
FlatRecord = Dict[str, Any]


@dataclass(slots=True)
class RejectedRecord:
    """A resource record excluded from a snapshot because it cannot be matched."""

    index: int
    reason: str
    record: Any = None


@dataclass(slots=True)
class Snapshot(Mapping):
    """Read-only inventory of resource records keyed by ``resourceId``."""

    resources: Mapping[str, RawResource] = field(default_factory=dict)
    taken_on: Optional[date] = None
    source: Optional[str] = None
    rejected: List[RejectedRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.resources, MappingProxyType):
            self.resources = MappingProxyType(dict(self.resources))

    def __getitem__(self, resource_id: str) -> RawResource:
        return self.resources[resource_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

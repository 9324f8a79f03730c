from __future__ import annotations

import gzip
import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, List, Mapping

SNAPSHOT_SUFFIXES = (".json", ".json.gz")


class SnapshotSourceError(RuntimeError):
    """Exception raised when a snapshot document cannot be retrieved or decoded."""


class SnapshotNotFound(SnapshotSourceError):
    """Raised when no snapshot document exists for the requested date."""

    def __init__(self, day: date, location: str) -> None:
        self.day = day
        self.location = location
        super().__init__(f"No configuration snapshot found for {day.isoformat()} in {location}")


@dataclass(slots=True)
class SnapshotDocument:
    """Decoded snapshot document together with where it was read from."""

    content: Mapping[str, Any]
    location: str
    day: date


class SnapshotSource(ABC):
    """Abstract base class describing how snapshot documents are retrieved."""

    @abstractmethod
    def fetch(self, day: date) -> SnapshotDocument:
        """Return the snapshot document representing ``day``."""


class LocalSnapshotSource(SnapshotSource):
    """Read AWS Config snapshots from a local mirror of the delivery bucket.

    Documents live under
    ``[<prefix>/]AWSLogs/<account>/Config/<region>/<year>/<month>/<day>/ConfigSnapshot/``
    with unpadded month and day. When several documents exist for a day the
    first one by name is used.
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        *,
        account_id: str,
        region: str,
        prefix: str | None = None,
    ) -> None:
        self.root = Path(root).resolve()
        self.account_id = account_id
        self.region = region
        self.prefix = prefix.strip("/") if prefix else None

    def fetch(self, day: date) -> SnapshotDocument:
        directory = self.snapshot_directory(day)
        candidates = self._list_documents(directory)
        if not candidates:
            raise SnapshotNotFound(day, str(directory))

        path = candidates[0]
        return SnapshotDocument(content=self._load_document(path), location=str(path), day=day)

    def snapshot_directory(self, day: date) -> Path:
        """Return the directory holding the snapshot documents for ``day``."""

        base = self.root
        if self.prefix:
            base = base / self.prefix
        return (
            base
            / "AWSLogs"
            / self.account_id
            / "Config"
            / self.region
            / str(day.year)
            / str(day.month)
            / str(day.day)
            / "ConfigSnapshot"
        )

    # Document helpers -----------------------------------------------------------
    def _list_documents(self, directory: Path) -> List[Path]:
        if not directory.is_dir():
            return []

        return sorted(
            path
            for path in directory.iterdir()
            if path.is_file() and path.name.endswith(SNAPSHOT_SUFFIXES)
        )

    def _load_document(self, path: Path) -> Mapping[str, Any]:
        try:
            if path.name.endswith(".gz"):
                with gzip.open(path, "rt", encoding="utf-8") as handle:
                    data = json.load(handle)
            else:
                with path.open("r", encoding="utf-8") as handle:
                    data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise SnapshotSourceError(f"Invalid JSON in snapshot document: {path}") from exc
        except (OSError, EOFError, UnicodeDecodeError) as exc:
            raise SnapshotSourceError(f"Failed to read snapshot document {path}") from exc

        if not isinstance(data, Mapping):
            raise SnapshotSourceError(f"Snapshot document must be a JSON object: {path}")
        return data


__all__ = [
    "LocalSnapshotSource",
    "SnapshotDocument",
    "SnapshotNotFound",
    "SnapshotSource",
    "SnapshotSourceError",
]

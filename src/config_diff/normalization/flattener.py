"""Flatten nested resource records into path to leaf value mappings."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..models import FlatRecord

DEFAULT_SEPARATOR = "."


class Flattener:
    """Convert a nested record into a flat mapping keyed by dotted paths.

    Mapping keys and sequence indices become path segments. Scalars and empty
    containers are leaves. Segments are not escaped, so keys containing the
    separator can collide with nested paths; configuration item keys never do.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        if not separator:
            raise ValueError("separator must be a non-empty string")
        self.separator = separator

    def flatten(self, record: Mapping[str, Any] | None) -> FlatRecord:
        """Return the flat representation of ``record`` (``{}`` when absent)."""

        flat: FlatRecord = {}
        if not record:
            return flat

        self._descend(record, "", flat)
        return flat

    # ------------------------------------------------------------------
    def _descend(self, value: Any, prefix: str, flat: FlatRecord) -> None:
        if isinstance(value, Mapping) and value:
            for key, child in value.items():
                self._descend(child, self._join(prefix, str(key)), flat)
        elif _is_sequence(value) and value:
            for index, child in enumerate(value):
                self._descend(child, self._join(prefix, str(index)), flat)
        else:
            flat[prefix] = value

    def _join(self, prefix: str, segment: str) -> str:
        if not prefix:
            return segment
        return f"{prefix}{self.separator}{segment}"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


_DEFAULT_FLATTENER = Flattener()


def flatten(record: Mapping[str, Any] | None) -> FlatRecord:
    """Flatten ``record`` using the default ``.`` separator."""

    return _DEFAULT_FLATTENER.flatten(record)


__all__ = ["DEFAULT_SEPARATOR", "Flattener", "flatten"]

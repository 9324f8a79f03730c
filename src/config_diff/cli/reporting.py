"""Text renderers for snapshot diff reports."""

from __future__ import annotations

import json
from typing import Any

from ..models import ABSENT, DiffStatus, ResourceDiff
from ..service import DiffReport

RULE = "---------------"
NOT_AVAILABLE = "N/A"


def format_value(value: Any) -> str:
    """Render a leaf value for terminal output."""

    if value is ABSENT:
        return NOT_AVAILABLE
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True)


def render_detail(report: DiffReport) -> str:
    """Render every changed resource with its per-field old and new values."""

    start = report.start.isoformat()
    end = report.end.isoformat()

    if not report.diffs:
        return f"No changes detected between {start} and {end}."

    lines: list[str] = []
    for diff in report.diffs:
        lines.extend(_render_resource(diff, start, end))
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def _render_resource(diff: ResourceDiff, start: str, end: str) -> list[str]:
    resource_type = diff.type if diff.type is not None else NOT_AVAILABLE
    lines = [f"Resource {diff.id} : Type {resource_type}"]

    if diff.status is DiffStatus.CREATED:
        lines.append(f"{start} - Did not exist")
        lines.append(f"{end} + Exists")
        return lines
    if diff.status is DiffStatus.DELETED:
        lines.append(f"{start} - Existed")
        lines.append(f"{end} + No longer exists")
        return lines

    lines.append(RULE)
    for path, change in diff.changes.items():
        lines.append(f"{start} - {path} : {format_value(change.old)}")
        lines.append(f"{end} + {path} : {format_value(change.new)}")
        lines.append(RULE)
    return lines


def render_types(report: DiffReport) -> str:
    """Render the distinct resource types that changed between the two dates."""

    lines = [
        "Resource types that have been changed between "
        f"{report.start.isoformat()} and {report.end.isoformat()}:"
    ]
    lines.extend(report.resource_types())
    return "\n".join(lines)


def render_json(report: DiffReport, *, types_only: bool = False) -> str:
    if types_only:
        return json.dumps({"resource_types": report.resource_types()}, indent=2)
    return json.dumps(report.to_dict(), indent=2, default=str)


__all__ = ["NOT_AVAILABLE", "format_value", "render_detail", "render_json", "render_types"]

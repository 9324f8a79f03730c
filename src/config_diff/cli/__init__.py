"""Command-line interface package for the snapshot diff tooling."""

from .app import build_parser, create_service, main, run
from .reporting import format_value, render_detail, render_json, render_types

__all__ = [
    "build_parser",
    "create_service",
    "format_value",
    "main",
    "render_detail",
    "render_json",
    "render_types",
    "run",
]

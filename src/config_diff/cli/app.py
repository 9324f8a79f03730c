"""Command-line interface implementation for the snapshot diff tooling."""

from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path
from typing import Any, Sequence

from ..adapters import (
    AwsCliIdentityResolver,
    IdentityResolutionFailure,
    IdentityResolver,
    LocalSnapshotSource,
    SnapshotSourceError,
    StaticIdentityResolver,
)
from ..config import ConfigError, Settings, load_settings
from ..normalization import MalformedRecord, SnapshotBuilder
from ..observability import setup_logging
from ..service import DiffReport, ReportDiffService
from .reporting import render_detail, render_json, render_types


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {value}") from exc


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="config-diff", description="Compare AWS Config snapshots between two dates"
    )
    subparsers = parser.add_subparsers(dest="command")

    report_parser = subparsers.add_parser(
        "report-diff", help="Report the resources that changed between two dates."
    )
    report_parser.add_argument("start", type=_parse_date, help="First date to compare (YYYY-MM-DD).")
    report_parser.add_argument(
        "end",
        type=_parse_date,
        nargs="?",
        default=None,
        help="Last date to compare (YYYY-MM-DD). Defaults to today.",
    )
    report_parser.add_argument(
        "--resource-types-only",
        action="store_true",
        help="Return a list of resource types involved instead of the diff.",
    )
    report_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format for the report.",
    )
    report_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML settings file.",
    )
    report_parser.add_argument(
        "--snapshot-root",
        default=None,
        help="Directory holding a local mirror of the AWS Config delivery bucket.",
    )
    report_parser.add_argument("--region", default=None, help="Region the snapshots were taken in.")
    report_parser.add_argument(
        "--prefix", default=None, help="Key prefix configured on the delivery channel."
    )
    report_parser.add_argument(
        "--account-id",
        default=None,
        help="Account id to compare. Looked up with the AWS CLI when omitted.",
    )
    report_parser.add_argument(
        "--aws-bin",
        default=None,
        help="Name or path of the AWS CLI executable used for the identity lookup.",
    )
    report_parser.add_argument(
        "--skip-malformed",
        dest="strict",
        action="store_const",
        const=False,
        default=None,
        help="Exclude records without a usable resourceId instead of failing.",
    )
    report_parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for diagnostics written to stderr.",
    )

    return parser


def _resolve_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {
        "snapshot_root": args.snapshot_root,
        "region": args.region,
        "prefix": args.prefix,
        "account_id": args.account_id,
        "aws_bin": args.aws_bin,
        "strict": args.strict,
        "log_level": args.log_level,
    }
    return load_settings(args.config).merged(overrides)


def create_service(settings: Settings) -> ReportDiffService:
    """Create a diff service backed by the local snapshot mirror."""

    identity_resolver: IdentityResolver
    if settings.account_id:
        identity_resolver = StaticIdentityResolver(settings.account_id)
    else:
        identity_resolver = AwsCliIdentityResolver(
            aws_bin=settings.aws_bin, profile=settings.aws_profile
        )

    def factory(account_id: str) -> LocalSnapshotSource:
        return LocalSnapshotSource(
            settings.snapshot_root,
            account_id=account_id,
            region=settings.region,
            prefix=settings.prefix,
        )

    return ReportDiffService(
        identity_resolver=identity_resolver,
        source_factory=factory,
        snapshot_builder=SnapshotBuilder(strict=settings.strict),
    )


def _format_report(report: DiffReport, *, types_only: bool, output_format: str) -> str:
    if output_format not in {"text", "json"}:
        raise ValueError("format must be either 'text' or 'json'")

    if output_format == "json":
        return render_json(report, types_only=types_only)
    if types_only:
        return render_types(report)
    return render_detail(report)


def _handle_report_diff(args: argparse.Namespace) -> int:
    try:
        settings = _resolve_settings(args)
    except ConfigError as exc:
        print(f"Error: {exc}")
        return 2

    setup_logging(settings.log_level)

    start: date = args.start
    end: date = args.end or date.today()
    if end < start:
        print(f"Error: end date {end.isoformat()} is before start date {start.isoformat()}")
        return 2

    service = create_service(settings)

    try:
        report = service.compare(start, end)
    except (IdentityResolutionFailure, SnapshotSourceError, MalformedRecord) as exc:
        print(f"Error: {exc}")
        return 2

    print(_format_report(report, types_only=args.resource_types_only, output_format=args.format))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "report-diff":
        return _handle_report_diff(args)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()

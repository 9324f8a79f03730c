"""Logging keeps stdout free for the rendered report."""

from __future__ import annotations

import json
from typing import Iterator

import pytest
import structlog

from config_diff.normalization import SnapshotBuilder
from config_diff.observability import get_logger, setup_logging


@pytest.fixture(autouse=True)
def unconfigured_structlog() -> Iterator[None]:
    structlog.reset_defaults()
    yield
    setup_logging()


def test_events_go_to_stderr_without_setup(capsys: pytest.CaptureFixture[str]) -> None:
    # A library caller never runs setup_logging; importing a module logger is all it does.
    get_logger("caller")

    snapshot = SnapshotBuilder(strict=False).build(
        {"configurationItems": [{"resourceType": "AWS::S3::Bucket"}]}
    )

    captured = capsys.readouterr()
    assert len(snapshot.rejected) == 1
    assert captured.out == ""
    assert "snapshot.record_rejected" in captured.err


def test_setup_logging_emits_json_lines_on_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("debug")

    get_logger("differ").debug("diff.completed", resources=3)

    captured = capsys.readouterr()
    assert captured.out == ""
    event = json.loads(captured.err.strip())
    assert event["event"] == "diff.completed"
    assert event["component"] == "differ"
    assert event["level"] == "debug"
    assert event["resources"] == 3


def test_events_below_level_are_dropped(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("error")

    get_logger("service").warning("snapshot.loading")

    assert capsys.readouterr().err == ""

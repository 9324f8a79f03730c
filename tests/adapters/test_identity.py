import subprocess
from types import SimpleNamespace

import pytest

from config_diff.adapters import (
    AwsCliIdentityResolver,
    IdentityResolutionFailure,
    StaticIdentityResolver,
)


def test_static_resolver_returns_configured_account():
    assert StaticIdentityResolver(" 123456789012 ").resolve() == "123456789012"


@pytest.mark.parametrize("account_id", [None, "", "  "])
def test_static_resolver_requires_account(account_id):
    with pytest.raises(IdentityResolutionFailure):
        StaticIdentityResolver(account_id).resolve()


def test_aws_cli_resolver_runs_sts(monkeypatch):
    recorded = {}

    def fake_run(self, args):
        recorded["args"] = args
        return SimpleNamespace(stdout="123456789012\n")

    monkeypatch.setattr(AwsCliIdentityResolver, "_run_command", fake_run, raising=False)

    resolver = AwsCliIdentityResolver(aws_bin="aws2", profile="audit")

    assert resolver.resolve() == "123456789012"
    assert recorded["args"] == [
        "aws2",
        "sts",
        "get-caller-identity",
        "--query",
        "Account",
        "--output",
        "text",
        "--profile",
        "audit",
    ]


@pytest.mark.parametrize("stdout", ["", "None\n", "  \n"])
def test_aws_cli_resolver_rejects_empty_output(monkeypatch, stdout):
    monkeypatch.setattr(
        AwsCliIdentityResolver,
        "_run_command",
        lambda self, args: SimpleNamespace(stdout=stdout),
        raising=False,
    )

    with pytest.raises(IdentityResolutionFailure):
        AwsCliIdentityResolver().resolve()


def test_missing_executable_raises(monkeypatch):
    def fake_subprocess_run(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(subprocess, "run", fake_subprocess_run)

    with pytest.raises(IdentityResolutionFailure, match="Executable not found: aws"):
        AwsCliIdentityResolver().resolve()


def test_failed_command_raises(monkeypatch):
    def fake_subprocess_run(args, **kwargs):
        raise subprocess.CalledProcessError(255, args, stderr="Unable to locate credentials")

    monkeypatch.setattr(subprocess, "run", fake_subprocess_run)

    with pytest.raises(IdentityResolutionFailure) as excinfo:
        AwsCliIdentityResolver().resolve()

    assert "exit code 255" in str(excinfo.value)
    assert "Unable to locate credentials" in str(excinfo.value)

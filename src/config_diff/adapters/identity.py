"""Account identity resolution used to locate snapshot documents."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

from ..observability import get_logger

logger = get_logger("identity")


class IdentityResolutionFailure(RuntimeError):
    """Raised when the account whose snapshots are compared cannot be determined."""


class IdentityResolver(ABC):
    """Abstract base class describing the identity lookup contract."""

    @abstractmethod
    def resolve(self) -> str:
        """Return the account identifier."""


class StaticIdentityResolver(IdentityResolver):
    """Resolver returning an account id supplied through configuration."""

    def __init__(self, account_id: str | None) -> None:
        self.account_id = (account_id or "").strip()

    def resolve(self) -> str:
        if not self.account_id:
            raise IdentityResolutionFailure("No account id configured")
        return self.account_id


class AwsCliIdentityResolver(IdentityResolver):
    """Resolve the caller's account through ``aws sts get-caller-identity``."""

    def __init__(self, *, aws_bin: str = "aws", profile: str | None = None) -> None:
        self.aws_bin = aws_bin
        self.profile = profile

    def resolve(self) -> str:
        command = [
            self.aws_bin,
            "sts",
            "get-caller-identity",
            "--query",
            "Account",
            "--output",
            "text",
        ]
        if self.profile:
            command.extend(["--profile", self.profile])

        completed = self._run_command(command)
        account_id = (completed.stdout or "").strip()
        if not account_id or account_id == "None":
            raise IdentityResolutionFailure("Caller identity lookup returned no account id")

        logger.info("identity.resolved", account_id=account_id)
        return account_id

    # Command runner -------------------------------------------------------------
    def _run_command(self, args: List[str]) -> subprocess.CompletedProcess[str]:
        try:
            completed = subprocess.run(
                args,
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise IdentityResolutionFailure(f"Executable not found: {args[0]}") from exc
        except subprocess.CalledProcessError as exc:
            detail: Optional[str] = (exc.stderr or "").strip() or None
            message = f"Command '{' '.join(args)}' failed with exit code {exc.returncode}"
            if detail:
                message = f"{message}: {detail}"
            raise IdentityResolutionFailure(message) from exc

        return completed


__all__ = [
    "AwsCliIdentityResolver",
    "IdentityResolutionFailure",
    "IdentityResolver",
    "StaticIdentityResolver",
]

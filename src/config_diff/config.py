"""Settings loading from an optional YAML file and CONFIG_DIFF_* environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

ENV_PREFIX = "CONFIG_DIFF_"
LOG_LEVELS = {"debug", "info", "warning", "error"}


class ConfigError(RuntimeError):
    """Raised when settings cannot be loaded or contain invalid values."""


@dataclass(slots=True)
class Settings:
    """Runtime settings for snapshot retrieval and reporting."""

    snapshot_root: str = "."
    region: str = "us-east-1"
    prefix: str | None = None
    account_id: str | None = None
    aws_bin: str = "aws"
    aws_profile: str | None = None
    strict: bool = True
    log_level: str = "warning"

    def merged(self, overrides: Mapping[str, Any]) -> "Settings":
        """Return a copy with the non-``None`` values of ``overrides`` applied."""

        values = {key: value for key, value in overrides.items() if value is not None}
        return _validate(replace(self, **_coerce(values, source="overrides")))


_FIELD_NAMES = {item.name for item in fields(Settings)}
_BOOL_FIELDS = {"strict"}


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in ("true", "1", "yes"):
            return True
        if normalized in ("false", "0", "no"):
            return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def _coerce(values: Mapping[str, Any], *, source: str) -> Dict[str, Any]:
    unknown = set(values) - _FIELD_NAMES
    if unknown:
        raise ConfigError(f"Unknown settings in {source}: {', '.join(sorted(unknown))}")

    coerced: Dict[str, Any] = {}
    for key, value in values.items():
        if key in _BOOL_FIELDS:
            coerced[key] = _parse_bool(key, value)
        elif value is None:
            coerced[key] = None
        else:
            coerced[key] = str(value)
    return coerced


def _validate(settings: Settings) -> Settings:
    level = settings.log_level.lower()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Invalid log level: {settings.log_level}. Must be one of {sorted(LOG_LEVELS)}")
    if not settings.region:
        raise ConfigError("region must not be empty")
    settings.log_level = level
    return settings


def _load_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
        raise ConfigError(f"Failed to read settings file {path}") from exc

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in settings file {path}") from exc

    if not isinstance(data, Mapping):
        raise ConfigError(f"Settings file must be a mapping: {path}")

    return dict(data)


def _from_env(env: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name in _FIELD_NAMES:
        raw = env.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw != "":
            values[name] = raw
    return values


def load_settings(
    path: str | os.PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings: defaults, then the settings file, then environment variables."""

    environ = os.environ if env is None else env
    if path is None and environ.get(f"{ENV_PREFIX}CONFIG"):
        path = environ[f"{ENV_PREFIX}CONFIG"]

    values: Dict[str, Any] = {}
    if path is not None:
        settings_path = Path(path)
        values.update(_coerce(_load_file(settings_path), source=str(settings_path)))
    values.update(_coerce(_from_env(environ), source="environment"))

    return _validate(Settings(**values))


__all__ = ["ConfigError", "ENV_PREFIX", "LOG_LEVELS", "Settings", "load_settings"]

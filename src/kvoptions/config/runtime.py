from __future__ import annotations

"""Runtime helpers for working with environment-backed configuration."""


import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TypeVar

from .errors import ConfigurationError

T = TypeVar("T")

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}

_DOTENV_CANDIDATES = (Path(".env"), Path.home() / ".env")
_JSON_ENV_CANDIDATES = (Path("config/runtime_env.json"),)

_DEFAULT_VALUES: dict[str, str] | None = None


def _load_default_values() -> dict[str, str]:
    """Load configuration values from .env-style files or JSON defaults."""
    from .runtime_helpers import DotenvLoader, JsonConfigLoader

    global _DEFAULT_VALUES
    if _DEFAULT_VALUES is not None:
        return _DEFAULT_VALUES

    defaults: dict[str, str] = {}

    def _maybe_set(key: str, value: str) -> None:
        if key not in defaults:
            defaults[key] = value

    for path in _DOTENV_CANDIDATES:
        for key, value in DotenvLoader.load_from_file(path).items():
            _maybe_set(key, value)

    for path in _JSON_ENV_CANDIDATES:
        for key, value in JsonConfigLoader.load_from_file(path).items():
            _maybe_set(key, value)

    _DEFAULT_VALUES = defaults
    return defaults


def _default_value(name: str) -> Optional[str]:
    """Return the default value for *name* if declared in config."""

    return _load_default_values().get(name)


def _normalize(value: str | None, *, strip: bool) -> str | None:
    if value is None:
        return None
    return value.strip() if strip else value


def coerce(name: str, raw_value: str, *, cast: Callable[[str], T]) -> T:
    """Apply *cast* to a raw setting, reporting failures as ``ConfigurationError``."""
    try:
        return cast(raw_value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Failed to cast setting {name!r} (got {raw_value!r})") from exc


def env_str(
    name: str,
    or_value: str | None = None,
    *,
    strip: bool = True,
    allow_blank: bool = False,
) -> str | None:
    """Fetch an environment variable, falling back to .env and JSON defaults."""

    value = _normalize(os.getenv(name), strip=strip)

    if value is None or (not allow_blank and value == ""):
        configured_default = _default_value(name)
        if configured_default is not None:
            value = _normalize(configured_default, strip=strip)

    if value is None or (not allow_blank and value == ""):
        return or_value
    return value


def env_bool(name: str, or_value: bool | None = None) -> bool | None:
    """Fetch an environment variable and coerce it to ``bool``."""

    raw = env_str(name)
    if raw is None:
        return or_value
    return parse_bool(name, raw)


def parse_bool(name: str, raw: str) -> bool:
    """Interpret *raw* as a boolean flag."""
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Setting {name!r} must be a boolean (allowed: {sorted(_TRUE_VALUES | _FALSE_VALUES)}, got {raw!r})")


@dataclass(frozen=True)
class JsonConfig:
    path: Path
    payload: dict[str, object]


def load_json(config_path: Path) -> JsonConfig:
    """Load a JSON object from *config_path*."""

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file {config_path} does not exist")
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Failed to parse JSON config {config_path}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"JSON config {config_path} must contain an object at the top level")

    return JsonConfig(path=config_path, payload=data)


__all__ = [
    "ConfigurationError",
    "JsonConfig",
    "coerce",
    "env_bool",
    "env_str",
    "load_json",
    "parse_bool",
]

"""
Environment and JSON loading for ``ConnectionConfig``.

Resolution order: ``REDIS_URL`` when set; otherwise the optional
``config/redis_config.json`` file overlaid with ``REDIS_*`` environment variables.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import env_bool, env_str
from ..config.errors import ConfigurationError
from ..config.runtime import load_json
from ..connection_config import ConnectionConfig
from ..tls import CERT_REQS_CHOICES, TLSConfig
from .field_specs import KIND_BOOL, KIND_STR, SCALAR_FIELDS, parse_json_value, parse_text
from .url_parser import config_from_url

logger = logging.getLogger(__name__)

ENV_PREFIX = "REDIS_"
URL_ENV = "REDIS_URL"
CONFIG_PATH_ENV = "REDIS_CONFIG_PATH"
DEFAULT_CONFIG_RELATIVE_PATH = Path("config") / "redis_config.json"

_TLS_TEXT_FIELDS = ("ca_certs", "ca_data", "certfile", "keyfile", "cert_reqs")


def _config_path() -> Optional[Path]:
    """Return the config file to read, or ``None`` when the default file is absent."""
    configured = env_str(CONFIG_PATH_ENV)
    if configured:
        path = Path(configured).expanduser()
        if not path.exists():
            raise ConfigurationError.missing_value(CONFIG_PATH_ENV, f"{path} does not exist")
        return path

    path = Path.cwd() / DEFAULT_CONFIG_RELATIVE_PATH
    if not path.exists():
        logger.debug("No Redis config file at %s; using environment only", path)
        return None
    return path


def _validated_cert_reqs(value: str) -> str:
    if value not in CERT_REQS_CHOICES:
        raise ConfigurationError.invalid_value("tls cert_reqs", value, f"Expected one of {sorted(CERT_REQS_CHOICES)}")
    return value


def _tls_from_json(raw: Any, path: Path) -> Optional[TLSConfig]:
    if raw is None or raw is False:
        return None
    if raw is True:
        return TLSConfig()
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Redis config at {path}: 'tls' must be a boolean or an object")

    settings: Dict[str, Any] = {}
    for key, value in raw.items():
        if key in _TLS_TEXT_FIELDS:
            settings[key] = parse_json_value(f"tls.{key}", KIND_STR, value)
        elif key == "check_hostname":
            settings[key] = parse_json_value("tls.check_hostname", KIND_BOOL, value)
        else:
            raise ConfigurationError(f"Redis config at {path}: unknown tls setting {key!r}")
    if "cert_reqs" in settings:
        _validated_cert_reqs(settings["cert_reqs"])
    return TLSConfig(**settings)


def _load_json_values(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}

    payload = load_json(path).payload
    raw = payload.get("redis")
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Redis config at {path} must be a JSON object with key 'redis'")

    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if key == "tls":
            values["tls_config"] = _tls_from_json(value, path)
        elif key in SCALAR_FIELDS:
            values[key] = parse_json_value(key, SCALAR_FIELDS[key], value)
        else:
            raise ConfigurationError(f"Redis config at {path}: unknown setting {key!r}")
    return values


def _env_values() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name, kind in SCALAR_FIELDS.items():
        env_name = f"{ENV_PREFIX}{name.upper()}"
        raw = env_str(env_name, allow_blank=kind == KIND_STR, strip=kind != KIND_STR)
        if raw is not None:
            values[name] = parse_text(env_name, kind, raw)

    if "addr" not in values:
        host = env_str("REDIS_HOST")
        port = env_str("REDIS_PORT")
        if host or port:
            values["addr"] = f"{host or 'localhost'}:{port or 6379}"
    return values


def _env_tls(current: Optional[TLSConfig]) -> Optional[TLSConfig]:
    enabled = env_bool("REDIS_TLS")
    if enabled is False:
        return None

    overrides: Dict[str, Any] = {}
    for key in _TLS_TEXT_FIELDS:
        value = env_str(f"REDIS_TLS_{key.upper()}")
        if value is not None:
            overrides[key] = value
    check_hostname = env_bool("REDIS_TLS_CHECK_HOSTNAME")
    if check_hostname is not None:
        overrides["check_hostname"] = check_hostname
    if "cert_reqs" in overrides:
        _validated_cert_reqs(overrides["cert_reqs"])

    if current is None and not enabled and not overrides:
        return None
    base = current or TLSConfig()
    if not overrides:
        return base
    settings = {key: getattr(base, key) for key in (*_TLS_TEXT_FIELDS, "check_hostname")}
    settings.update(overrides)
    return TLSConfig(**settings)


def load_connection_config() -> ConnectionConfig:
    """
    Load a ``ConnectionConfig`` from ``REDIS_URL`` or from file plus environment.

    Raises:
        ConfigurationError: If any source holds a malformed value
    """
    url = env_str(URL_ENV)
    if url:
        logger.debug("Loading Redis connection settings from %s", URL_ENV)
        return config_from_url(url)

    values = _load_json_values(_config_path())
    values.update(_env_values())
    values["tls_config"] = _env_tls(values.get("tls_config"))

    return ConnectionConfig(**values)


@lru_cache(maxsize=1)
def get_connection_config() -> ConnectionConfig:
    """Process-wide cached :func:`load_connection_config`."""
    return load_connection_config()


__all__ = ["get_connection_config", "load_connection_config"]

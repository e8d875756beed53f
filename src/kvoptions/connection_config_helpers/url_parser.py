"""Connection URL parsing into ``ConnectionConfig`` values."""

from __future__ import annotations

from typing import Any, Dict
from urllib.parse import SplitResult, parse_qsl, unquote, urlsplit

from ..client_options import NETWORK_TCP, NETWORK_UNIX
from ..config.errors import ConfigurationError
from ..connection_config import ConnectionConfig
from ..tls import TLSConfig
from .field_specs import SCALAR_FIELDS, URL_QUERY_FIELDS, parse_text

_TCP_SCHEMES = {"redis": False, "rediss": True}
_UNIX_SCHEME = "unix"
_DEFAULT_PORT = 6379


def _parse_query(query: str) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name, raw in parse_qsl(query, keep_blank_values=True):
        if name not in URL_QUERY_FIELDS:
            raise ConfigurationError.invalid_value("url option", name, f"Supported options: {', '.join(sorted(URL_QUERY_FIELDS))}")
        if name in values:
            raise ConfigurationError.invalid_value("url option", name, "Option given more than once")
        values[name] = parse_text(name, SCALAR_FIELDS[name], raw)
    return values


def _credentials(parts: SplitResult) -> Dict[str, str]:
    credentials: Dict[str, str] = {}
    if parts.username:
        credentials["username"] = unquote(parts.username)
    if parts.password:
        credentials["password"] = unquote(parts.password)
    return credentials


def _tcp_addr(parts: SplitResult, url: str) -> str:
    try:
        port = parts.port or _DEFAULT_PORT
    except ValueError as exc:
        raise ConfigurationError.invalid_format("url port", url, "redis://host:port/db") from exc
    host = parts.hostname or "localhost"
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def _db_from_path(path: str, url: str) -> Dict[str, int]:
    stripped = path.strip("/")
    if not stripped:
        return {}
    try:
        return {"db": int(stripped)}
    except ValueError as exc:
        raise ConfigurationError.invalid_format("url database", url, "redis://host:port/<db number>") from exc


def config_from_url(url: str) -> ConnectionConfig:
    """
    Build a ``ConnectionConfig`` from a connection URL.

    Supports ``redis://[user:password@]host[:port][/db]``, ``rediss://`` (TLS) and
    ``unix://[user:password@]/path/to/socket``. Remaining settings are read from the
    query string, e.g. ``?dial_timeout=3s&read_timeout=-1&pool_size=20``.

    Raises:
        ConfigurationError: If the URL or one of its options is invalid
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    values: Dict[str, Any] = _credentials(parts)

    if scheme in _TCP_SCHEMES:
        values["network"] = NETWORK_TCP
        values["addr"] = _tcp_addr(parts, url)
        values.update(_db_from_path(parts.path, url))
        if _TCP_SCHEMES[scheme]:
            values["tls_config"] = TLSConfig()
    elif scheme == _UNIX_SCHEME:
        if not parts.path:
            raise ConfigurationError.missing_value("unix socket path", url)
        values["network"] = NETWORK_UNIX
        values["addr"] = parts.path
    else:
        raise ConfigurationError.invalid_value("url scheme", parts.scheme, "Expected redis, rediss or unix")

    query_values = _parse_query(parts.query)
    if "db" in query_values and "db" in values:
        raise ConfigurationError.invalid_value("url option", "db", "Database given in both path and query")
    values.update(query_values)

    return ConnectionConfig(**values)


__all__ = ["config_from_url"]

"""Textual option names and value kinds for ``ConnectionConfig`` fields."""

from __future__ import annotations

from typing import Any, Callable, Dict

from ..config.errors import ConfigurationError
from ..config.runtime import coerce, parse_bool
from .durations import parse_duration

KIND_STR = "str"
KIND_INT = "int"
KIND_BOOL = "bool"
KIND_DURATION = "duration"

# Scalar fields that may be set from URLs, JSON files and the environment.
SCALAR_FIELDS: Dict[str, str] = {
    "network": KIND_STR,
    "addr": KIND_STR,
    "client_name": KIND_STR,
    "protocol": KIND_INT,
    "username": KIND_STR,
    "password": KIND_STR,
    "db": KIND_INT,
    "max_retries": KIND_INT,
    "min_retry_backoff": KIND_DURATION,
    "max_retry_backoff": KIND_DURATION,
    "dial_timeout": KIND_DURATION,
    "read_timeout": KIND_DURATION,
    "write_timeout": KIND_DURATION,
    "context_timeout_enabled": KIND_BOOL,
    "pool_fifo": KIND_BOOL,
    "pool_size": KIND_INT,
    "pool_timeout": KIND_DURATION,
    "min_idle_conns": KIND_INT,
    "max_idle_conns": KIND_INT,
    "max_active_conns": KIND_INT,
    "conn_max_idle_time": KIND_DURATION,
    "conn_max_lifetime": KIND_DURATION,
    "disable_identity": KIND_BOOL,
}

# Options accepted in the query string of a connection URL.
URL_QUERY_FIELDS = frozenset(SCALAR_FIELDS) - {"network", "addr", "username", "password"}


def parse_text(name: str, kind: str, raw: str) -> Any:
    """Convert a textual setting (env var, URL query) to the field's type."""
    parsers: Dict[str, Callable[[str], Any]] = {
        KIND_STR: str,
        KIND_INT: lambda text: coerce(name, text.strip(), cast=int),
        KIND_BOOL: lambda text: parse_bool(name, text),
        KIND_DURATION: lambda text: parse_duration(text, name=name),
    }
    return parsers[kind](raw)


def parse_json_value(name: str, kind: str, value: Any) -> Any:
    """Validate a JSON-decoded setting against the field's type."""
    if kind == KIND_STR:
        if not isinstance(value, str):
            raise ConfigurationError.invalid_value(name, value, "Expected a string")
        return value
    if kind == KIND_BOOL:
        if not isinstance(value, bool):
            raise ConfigurationError.invalid_value(name, value, "Expected a boolean")
        return value
    if kind == KIND_INT:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError.invalid_value(name, value, "Expected an integer")
        return value
    if isinstance(value, str):
        return parse_duration(value, name=name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError.invalid_value(name, value, "Expected seconds or a duration string")
    return float(value)


__all__ = [
    "KIND_BOOL",
    "KIND_DURATION",
    "KIND_INT",
    "KIND_STR",
    "SCALAR_FIELDS",
    "URL_QUERY_FIELDS",
    "parse_json_value",
    "parse_text",
]

"""Shared configuration helpers and dataclasses."""

from .errors import ConfigurationError
from .runtime import (
    JsonConfig,
    coerce,
    env_bool,
    env_str,
    load_json,
    parse_bool,
)

__all__ = [
    "ConfigurationError",
    "JsonConfig",
    "coerce",
    "env_bool",
    "env_str",
    "load_json",
    "parse_bool",
]

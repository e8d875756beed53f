"""Loaders that build ``ConnectionConfig`` values from URLs, files and the environment."""

from .durations import parse_duration
from .loader import get_connection_config, load_connection_config
from .url_parser import config_from_url

__all__ = [
    "config_from_url",
    "get_connection_config",
    "load_connection_config",
    "parse_duration",
]

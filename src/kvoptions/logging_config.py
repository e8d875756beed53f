"""
Centralized logging configuration.

Provides a single ``setup_logging`` function that installs one console handler
on the root logger, with the level taken from ``LOG_LEVEL`` unless given.
"""

import logging
import sys
import threading
from typing import Optional, Union

from .config import env_str
from .config.errors import ConfigurationError

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_HANDLER_NAME = "kvoptions-console"
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Union[int, str, None]) -> int:
    if isinstance(level, int):
        return level
    name = (level or env_str("LOG_LEVEL", or_value="INFO") or "INFO").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ConfigurationError.invalid_value("LOG_LEVEL", name, "Expected a logging level name")
    return resolved


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("redis").setLevel(logging.WARNING)
    logging.getLogger("redis.connection").setLevel(logging.WARNING)
    logging.getLogger("redis.asyncio").setLevel(logging.WARNING)


def setup_logging(level: Union[int, str, None] = None) -> Optional[logging.Handler]:
    """Configure console logging; repeated calls only adjust the level."""
    resolved_level = _resolve_level(level)

    with _config_lock:
        root_logger = logging.getLogger()
        root_logger.setLevel(resolved_level)

        for handler in root_logger.handlers:
            if handler.get_name() == _HANDLER_NAME:
                return None

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(_HANDLER_NAME)
        console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        root_logger.addHandler(console_handler)

        _suppress_noisy_third_parties()
        return console_handler


__all__ = ["setup_logging"]

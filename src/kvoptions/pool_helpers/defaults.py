"""
Runtime defaults applied to zero-valued client options.

Why: ``ClientOptions`` keeps "not specified" (zero) distinct from explicit values
How: Resolves zero values and sentinels into the effective settings a pool uses
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from ..client_options import NETWORK_TCP, ClientOptions

DEFAULT_ADDR = "localhost:6379"
DEFAULT_PORT = 6379
# redis-py has no RESP2 fallback when HELLO fails; RESP3 needs protocol=3.
DEFAULT_PROTOCOL = 2
DEFAULT_DIAL_TIMEOUT_SECONDS = 5.0
DEFAULT_READ_TIMEOUT_SECONDS = 3.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_MIN_RETRY_BACKOFF_SECONDS = 0.008
DEFAULT_MAX_RETRY_BACKOFF_SECONDS = 0.512
DEFAULT_POOL_SIZE_PER_CPU = 10
DEFAULT_POOL_TIMEOUT_SECONDS = 30.0
POOL_TIMEOUT_READ_MARGIN_SECONDS = 1.0
DEFAULT_CONN_MAX_IDLE_TIME_SECONDS = 30 * 60.0


@dataclass(frozen=True)
class ResolvedOptions:
    """Effective settings; ``None`` durations mean "no timeout" or "never"."""

    network: str
    addr: str
    protocol: int
    dial_timeout: Optional[float]
    read_timeout: Optional[float]
    write_timeout: Optional[float]
    max_retries: int
    min_retry_backoff: float
    max_retry_backoff: float
    pool_size: int
    pool_timeout: Optional[float]
    conn_max_idle_time: Optional[float]
    conn_max_lifetime: Optional[float]


def _resolve_timeout(value: float, default: Optional[float]) -> Optional[float]:
    if value == 0:
        return default
    if value < 0:
        return None
    return float(value)


def _resolve_backoff(value: float, default: float) -> float:
    if value == 0:
        return default
    if value < 0:
        return 0.0
    return float(value)


def _resolve_max_retries(value: int) -> int:
    if value == 0:
        return DEFAULT_MAX_RETRIES
    if value < 0:
        return 0
    return value


def _resolve_pool_timeout(value: float, read_timeout: Optional[float]) -> Optional[float]:
    if value > 0:
        return float(value)
    if value < 0:
        return None
    if read_timeout is not None and read_timeout > 0:
        return read_timeout + POOL_TIMEOUT_READ_MARGIN_SECONDS
    return DEFAULT_POOL_TIMEOUT_SECONDS


def default_pool_size() -> int:
    return DEFAULT_POOL_SIZE_PER_CPU * (os.cpu_count() or 1)


def resolve_defaults(options: ClientOptions) -> ResolvedOptions:
    """Apply runtime defaults to the zero values and sentinels of ``options``."""
    network = options.network or NETWORK_TCP
    addr = options.addr
    if not addr and network == NETWORK_TCP:
        addr = DEFAULT_ADDR

    read_timeout = _resolve_timeout(options.read_timeout, DEFAULT_READ_TIMEOUT_SECONDS)
    write_timeout = _resolve_timeout(options.write_timeout, read_timeout)

    return ResolvedOptions(
        network=network,
        addr=addr,
        protocol=options.protocol if options.protocol >= 2 else DEFAULT_PROTOCOL,
        dial_timeout=_resolve_timeout(options.dial_timeout, DEFAULT_DIAL_TIMEOUT_SECONDS),
        read_timeout=read_timeout,
        write_timeout=write_timeout,
        max_retries=_resolve_max_retries(options.max_retries),
        min_retry_backoff=_resolve_backoff(options.min_retry_backoff, DEFAULT_MIN_RETRY_BACKOFF_SECONDS),
        max_retry_backoff=_resolve_backoff(options.max_retry_backoff, DEFAULT_MAX_RETRY_BACKOFF_SECONDS),
        pool_size=options.pool_size if options.pool_size > 0 else default_pool_size(),
        pool_timeout=_resolve_pool_timeout(options.pool_timeout, read_timeout),
        conn_max_idle_time=_resolve_timeout(options.conn_max_idle_time, DEFAULT_CONN_MAX_IDLE_TIME_SECONDS),
        conn_max_lifetime=float(options.conn_max_lifetime) if options.conn_max_lifetime > 0 else None,
    )


__all__ = [
    "DEFAULT_ADDR",
    "DEFAULT_CONN_MAX_IDLE_TIME_SECONDS",
    "DEFAULT_DIAL_TIMEOUT_SECONDS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MAX_RETRY_BACKOFF_SECONDS",
    "DEFAULT_MIN_RETRY_BACKOFF_SECONDS",
    "DEFAULT_POOL_SIZE_PER_CPU",
    "DEFAULT_POOL_TIMEOUT_SECONDS",
    "DEFAULT_PORT",
    "DEFAULT_PROTOCOL",
    "DEFAULT_READ_TIMEOUT_SECONDS",
    "ResolvedOptions",
    "default_pool_size",
    "resolve_defaults",
]

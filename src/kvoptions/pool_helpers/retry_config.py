"""Retry configuration derived from client options."""

from __future__ import annotations

from typing import Union

from redis.asyncio.retry import Retry as AsyncRetry
from redis.backoff import AbstractBackoff, ExponentialBackoff, NoBackoff
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError
from redis.retry import Retry as SyncRetry

from ..client_options import ClientOptions
from .defaults import ResolvedOptions, resolve_defaults

# Exceptions that should trigger automatic retry on connection drops
RETRY_ON_CONNECTION_ERROR: tuple[type[RedisError], ...] = (
    RedisConnectionError,
    RedisTimeoutError,
)


def create_backoff(resolved: ResolvedOptions) -> AbstractBackoff:
    """Exponential backoff between the effective bounds, or none when both are disabled."""
    if resolved.min_retry_backoff <= 0 and resolved.max_retry_backoff <= 0:
        return NoBackoff()
    return ExponentialBackoff(cap=resolved.max_retry_backoff, base=resolved.min_retry_backoff)


def create_retry(options: ClientOptions, *, use_asyncio: bool = False) -> Union[SyncRetry, AsyncRetry]:
    """Create a retry instance honoring ``max_retries`` and the backoff bounds."""
    resolved = resolve_defaults(options)
    retry_cls = AsyncRetry if use_asyncio else SyncRetry
    return retry_cls(
        backoff=create_backoff(resolved),
        retries=resolved.max_retries,
        supported_errors=RETRY_ON_CONNECTION_ERROR,
    )


__all__ = ["RETRY_ON_CONNECTION_ERROR", "create_backoff", "create_retry"]

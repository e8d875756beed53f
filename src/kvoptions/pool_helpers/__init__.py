"""Bridges client options onto redis-py connection pools."""

from .defaults import ResolvedOptions, resolve_defaults
from .limited_client import AsyncLimitedRedis, LimitedRedis
from .pool_initialization import (
    create_async_connection_pool,
    create_async_redis_client,
    create_connection_pool,
    create_redis_client,
)
from .pool_settings import build_pool_settings, mask_sensitive_settings
from .pool_validator import verify_pool_connection
from .retry_config import create_retry

__all__ = [
    "AsyncLimitedRedis",
    "LimitedRedis",
    "ResolvedOptions",
    "build_pool_settings",
    "create_async_connection_pool",
    "create_async_redis_client",
    "create_connection_pool",
    "create_redis_client",
    "create_retry",
    "mask_sensitive_settings",
    "resolve_defaults",
    "verify_pool_connection",
]

"""
Redis pool initialization coordinator.

Why: Coordinates pool creation, testing, and logging
How: Turns client options into redis-py blocking pools and clients
"""

import logging

import redis
import redis.asyncio

from ..client_options import ClientOptions
from .limited_client import AsyncLimitedRedis, LimitedRedis
from .pool_settings import build_pool_settings, mask_sensitive_settings
from .pool_validator import DEFAULT_VERIFY_TIMEOUT_SECONDS, verify_pool_connection

logger = logging.getLogger(__name__)


def create_connection_pool(options: ClientOptions) -> redis.BlockingConnectionPool:
    """Create a synchronous blocking pool configured from ``options``."""
    pool_settings = build_pool_settings(options)
    logger.debug("Redis pool settings: %s", mask_sensitive_settings(pool_settings))

    pool = redis.BlockingConnectionPool(**pool_settings)
    logger.info("Created Redis connection pool (max_connections=%s)", pool_settings["max_connections"])
    return pool


async def create_async_connection_pool(
    options: ClientOptions,
    *,
    verify: bool = False,
    verify_timeout: float = DEFAULT_VERIFY_TIMEOUT_SECONDS,
) -> redis.asyncio.BlockingConnectionPool:
    """
    Create an asyncio blocking pool configured from ``options``.

    Args:
        options: Client options
        verify: Ping the server before returning the pool
        verify_timeout: Seconds allowed for the verification ping

    Raises:
        RuntimeError: If verification fails; the pool is disconnected first
    """
    logger.debug("Redis package version: %s", redis.__version__)
    pool_settings = build_pool_settings(options, use_asyncio=True)
    logger.debug("Redis async pool settings: %s", mask_sensitive_settings(pool_settings))

    pool = redis.asyncio.BlockingConnectionPool(**pool_settings)
    if verify:
        try:
            await verify_pool_connection(pool, timeout=verify_timeout)
        except RuntimeError:
            await pool.disconnect()
            raise

    logger.info("Created async Redis connection pool (max_connections=%s)", pool_settings["max_connections"])
    return pool


def create_redis_client(options: ClientOptions) -> LimitedRedis:
    """Synchronous client backed by a fresh pool; commands pass through ``options.limiter``."""
    return LimitedRedis(connection_pool=create_connection_pool(options), limiter=options.limiter)


async def create_async_redis_client(options: ClientOptions, *, verify: bool = False) -> AsyncLimitedRedis:
    """Async client backed by a fresh pool; commands pass through ``options.limiter``."""
    pool = await create_async_connection_pool(options, verify=verify)
    return AsyncLimitedRedis(connection_pool=pool, limiter=options.limiter)


__all__ = [
    "create_async_connection_pool",
    "create_async_redis_client",
    "create_connection_pool",
    "create_redis_client",
]

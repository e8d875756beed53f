"""
Redis pool connection validation.

Why: Separates pool testing logic from pool creation
How: Pings the server through a temporary client with a timeout
"""

import asyncio
import logging

import redis.asyncio

from ..error_types import REDIS_ERRORS

logger = logging.getLogger(__name__)

DEFAULT_VERIFY_TIMEOUT_SECONDS = 5.0


async def verify_pool_connection(
    pool: redis.asyncio.ConnectionPool, *, timeout: float = DEFAULT_VERIFY_TIMEOUT_SECONDS
) -> None:
    """
    Ping the server through ``pool``.

    Raises:
        RuntimeError: If the ping fails or times out
    """
    test_client = redis.asyncio.Redis(connection_pool=pool)
    try:
        await asyncio.wait_for(test_client.ping(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.exception("Redis connection test timed out after %s seconds", timeout)
        raise RuntimeError(f"Redis connection test timed out after {timeout} seconds") from exc
    except REDIS_ERRORS as exc:
        logger.exception("Error testing Redis connection: %s", type(exc).__name__)
        raise RuntimeError(f"Redis connection test failed: {type(exc).__name__}") from exc
    finally:
        await test_client.aclose(close_connection_pool=False)


# Prevent pytest from collecting helper as a standalone test
verify_pool_connection.__test__ = False  # type: ignore[attr-defined]

__all__ = ["DEFAULT_VERIFY_TIMEOUT_SECONDS", "verify_pool_connection"]

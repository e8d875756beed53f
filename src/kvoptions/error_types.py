"""
Shared exception groupings for Redis client modules.
"""

import asyncio
from typing import Tuple, Type

from redis.exceptions import RedisError

ExceptionTuple = Tuple[Type[BaseException], ...]

# Redis operations may surface redis-py errors along with generic timeout/OS failures.
REDIS_ERRORS: ExceptionTuple = (RedisError, asyncio.TimeoutError, OSError, RuntimeError)

__all__ = ["REDIS_ERRORS", "ExceptionTuple"]

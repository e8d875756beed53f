"""
Redis clients that run every command under a limiter.

Why: ``ClientOptions.limiter`` gates operations, which pools know nothing about
How: Overrides ``execute_command`` to go through ``call_with_limiter``

Pipelines and pub/sub bypass ``execute_command`` on the client and are not gated.
"""

from functools import partial
from typing import Any, Optional

import redis
import redis.asyncio

from ..limiter import Limiter, acall_with_limiter, call_with_limiter


class LimitedRedis(redis.Redis):
    """Synchronous client that admits each command through ``limiter``."""

    def __init__(self, *args: Any, limiter: Optional[Limiter] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._limiter = limiter

    @property
    def limiter(self) -> Optional[Limiter]:
        return self._limiter

    def execute_command(self, *args: Any, **options: Any) -> Any:
        return call_with_limiter(self._limiter, partial(super().execute_command, *args, **options))


class AsyncLimitedRedis(redis.asyncio.Redis):
    """Asyncio client that admits each command through ``limiter``."""

    def __init__(self, *args: Any, limiter: Optional[Limiter] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._limiter = limiter

    @property
    def limiter(self) -> Optional[Limiter]:
        return self._limiter

    async def execute_command(self, *args: Any, **options: Any) -> Any:
        return await acall_with_limiter(self._limiter, partial(super().execute_command, *args, **options))


__all__ = ["AsyncLimitedRedis", "LimitedRedis"]

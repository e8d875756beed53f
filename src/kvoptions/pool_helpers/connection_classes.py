"""
Adapters that plug option callbacks into redis-py connections.

Why: redis-py takes classes and hook functions where the options carry plain callables
How: Wraps the credentials provider, the on-connect hook and the dialer
"""

from __future__ import annotations

import inspect
import logging
import socket
from typing import Any, Awaitable, Callable, Optional, Tuple, Union

from redis.connection import Connection
from redis.credentials import CredentialProvider
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from ..client_options import CredentialsProvider, Dialer, OnConnectHook

logger = logging.getLogger(__name__)


class CallableCredentialProvider(CredentialProvider):
    """Exposes a ``() -> (username, password)`` callable as a redis-py credential provider."""

    def __init__(self, provider: CredentialsProvider):
        self._provider = provider

    @property
    def provider(self) -> CredentialsProvider:
        return self._provider

    def get_credentials(self) -> Union[Tuple[str], Tuple[str, str]]:
        username, password = self._provider()
        if username:
            return username, password
        return (password,)

    async def get_credentials_async(self) -> Union[Tuple[str], Tuple[str, str]]:
        return self.get_credentials()


def _rejected(exc: Exception) -> RedisConnectionError:
    logger.warning("on_connect hook rejected connection: %s", exc)
    return RedisConnectionError(f"on_connect hook rejected connection: {exc}")


def build_connect_func(hook: OnConnectHook) -> Callable[[Any], None]:
    """
    Build a ``redis_connect_func`` running the standard handshake, then ``hook``.

    A failing hook surfaces as a redis ``ConnectionError`` so the connection is closed.
    """

    def connect_func(connection: Any) -> None:
        connection.on_connect()
        try:
            hook(connection)
        except RedisError:
            raise
        except Exception as exc:
            raise _rejected(exc) from exc

    return connect_func


def build_async_connect_func(hook: OnConnectHook) -> Callable[[Any], Awaitable[None]]:
    """Async variant of :func:`build_connect_func`; ``hook`` may be sync or async."""

    async def connect_func(connection: Any) -> None:
        await connection.on_connect()
        try:
            result = hook(connection)
            if inspect.isawaitable(result):
                await result
        except RedisError:
            raise
        except Exception as exc:
            raise _rejected(exc) from exc

    return connect_func


class DialerConnection(Connection):
    """Connection whose socket comes from a user supplied dialer."""

    def __init__(self, dialer: Dialer, network: str = "", addr: str = "", **kwargs: Any):
        self._dialer = dialer
        self._network = network
        self._addr = addr
        super().__init__(**kwargs)

    def repr_pieces(self):
        pieces = [("network", self._network), ("addr", self._addr), ("db", self.db)]
        if self.client_name:
            pieces.append(("client_name", self.client_name))
        return pieces

    def _connect(self) -> socket.socket:
        sock = self._dialer(self._network, self._addr)
        sock.settimeout(self.socket_timeout)
        return sock

    def _host_error(self) -> str:
        return self._addr or "<dialer>"

    @property
    def dialer(self) -> Optional[Dialer]:
        return self._dialer


__all__ = [
    "CallableCredentialProvider",
    "DialerConnection",
    "build_async_connect_func",
    "build_connect_func",
]

"""
Options value handed to the client/connection-pool runtime.

``ClientOptions`` carries exactly the settings of a ``ConnectionConfig`` in the
shape the pool constructor expects. Field names and their order are a
compatibility contract with the consumer; do not rename or reorder them.
"""

from __future__ import annotations

import socket
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple, Union

from .limiter import Limiter
from .tls import TLSConfig

# Duration sentinels (seconds). Zero always means "use the runtime default".
USE_DEFAULT = 0
DISABLED = -1
NO_TIMEOUT = -1
NO_DEADLINE = -2

NETWORK_TCP = "tcp"
NETWORK_UNIX = "unix"

Dialer = Callable[[str, str], socket.socket]
OnConnectHook = Callable[[Any], Union[None, Awaitable[None]]]
CredentialsProvider = Callable[[], Tuple[str, str]]


@dataclass(frozen=True)
class ClientOptions:
    """Settings consumed by the connection pool; zero values defer to its defaults."""

    network: str = ""
    addr: str = ""
    client_name: str = ""
    dialer: Optional[Dialer] = None
    on_connect: Optional[OnConnectHook] = None
    protocol: int = 0
    username: str = ""
    password: str = ""
    credentials_provider: Optional[CredentialsProvider] = None
    db: int = 0
    max_retries: int = 0
    min_retry_backoff: float = 0.0
    max_retry_backoff: float = 0.0
    dial_timeout: float = 0.0
    read_timeout: float = 0.0
    write_timeout: float = 0.0
    context_timeout_enabled: bool = False
    pool_fifo: bool = False
    pool_size: int = 0
    pool_timeout: float = 0.0
    min_idle_conns: int = 0
    max_idle_conns: int = 0
    max_active_conns: int = 0
    conn_max_idle_time: float = 0.0
    conn_max_lifetime: float = 0.0
    tls_config: Optional[TLSConfig] = None
    limiter: Optional[Limiter] = None
    disable_identity: bool = False


__all__ = [
    "DISABLED",
    "NETWORK_TCP",
    "NETWORK_UNIX",
    "NO_DEADLINE",
    "NO_TIMEOUT",
    "USE_DEFAULT",
    "ClientOptions",
    "CredentialsProvider",
    "Dialer",
    "OnConnectHook",
]

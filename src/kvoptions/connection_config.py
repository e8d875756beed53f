"""
User-facing Redis connection configuration.

``ConnectionConfig`` gathers transport, authentication, retry, timeout and pool
settings in one immutable value. ``to_client_options`` maps it field by field
onto the ``ClientOptions`` consumed by the pool runtime without applying any
defaults: a zero value stays zero so the runtime can tell "not specified" apart
from an explicit choice.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Optional

from .client_options import ClientOptions, CredentialsProvider, Dialer, OnConnectHook
from .limiter import Limiter
from .tls import TLSConfig


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Settings used to set up Redis connections.

    Durations are seconds. For every duration, ``0`` selects the runtime default;
    negative values are sentinels and are never treated as literal durations.

    Attributes:
        network: ``"tcp"`` or ``"unix"``; the runtime defaults to tcp
        addr: ``host:port`` address, or a socket path for unix
        client_name: name sent with ``CLIENT SETNAME`` on each connection
        dialer: creates network connections; takes priority over network/addr
        on_connect: hook called once for each newly established connection
        protocol: RESP version to negotiate, 2 or 3 (runtime default 3)
        username: ACL username
        password: password, or ACL user password
        credentials_provider: returns the current ``(username, password)`` before each reconnect
        db: database selected after connecting
        max_retries: retries before giving up (default 3; -1, not 0, disables retries)
        min_retry_backoff: minimum backoff between retries (default 8ms; -1 disables)
        max_retry_backoff: maximum backoff between retries (default 512ms; -1 disables)
        dial_timeout: timeout for establishing connections (default 5s; -1 disables)
        read_timeout: socket read timeout (default 3s; -1 blocks forever; -2 never sets a deadline)
        write_timeout: socket write timeout (same values as read_timeout)
        context_timeout_enabled: honor caller deadlines in addition to the fixed timeouts
        pool_fifo: FIFO reuse of idle connections instead of LIFO
        pool_size: base number of connections (default 10 per CPU)
        pool_timeout: wait for a free connection before failing (default read_timeout + 1s)
        min_idle_conns: idle connections to keep open
        max_idle_conns: idle connections to retain at most
        max_active_conns: connections allocated at a given time; 0 means unbounded
        conn_max_idle_time: idle time after which a connection is closed lazily (default 30m; -1 disables)
        conn_max_lifetime: age after which a connection is closed lazily; <= 0 disables
        tls_config: TLS settings; when set TLS is negotiated
        limiter: rate limiter or circuit breaker consulted per command by clients
            from ``create_redis_client`` / ``create_async_redis_client``
        disable_identity: skip the client library identification on connect
    """

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
    # Replica read routing is set by cluster-aware callers, never by users.
    _read_only: bool = field(default=False, init=False, repr=False, compare=False)
    disable_identity: bool = False

    @property
    def read_only(self) -> bool:
        """Whether read-only commands may be routed to replica nodes."""
        return self._read_only

    def with_replica_reads(self) -> "ConnectionConfig":
        """Return a copy that allows read-only commands on replicas."""
        clone = dataclasses.replace(self)
        object.__setattr__(clone, "_read_only", True)
        return clone

    def to_client_options(self) -> ClientOptions:
        return to_client_options(self)


def to_client_options(config: ConnectionConfig) -> ClientOptions:
    """
    Map a ``ConnectionConfig`` onto the ``ClientOptions`` expected by the pool.

    Every field is copied unchanged, sentinels included, and references are
    forwarded as-is. Replica routing is internal and not part of the options.
    """
    return ClientOptions(
        network=config.network,
        addr=config.addr,
        client_name=config.client_name,
        dialer=config.dialer,
        on_connect=config.on_connect,
        protocol=config.protocol,
        username=config.username,
        password=config.password,
        credentials_provider=config.credentials_provider,
        db=config.db,
        max_retries=config.max_retries,
        min_retry_backoff=config.min_retry_backoff,
        max_retry_backoff=config.max_retry_backoff,
        dial_timeout=config.dial_timeout,
        read_timeout=config.read_timeout,
        write_timeout=config.write_timeout,
        context_timeout_enabled=config.context_timeout_enabled,
        pool_fifo=config.pool_fifo,
        pool_size=config.pool_size,
        pool_timeout=config.pool_timeout,
        min_idle_conns=config.min_idle_conns,
        max_idle_conns=config.max_idle_conns,
        max_active_conns=config.max_active_conns,
        conn_max_idle_time=config.conn_max_idle_time,
        conn_max_lifetime=config.conn_max_lifetime,
        tls_config=config.tls_config,
        limiter=config.limiter,
        disable_identity=config.disable_identity,
    )


__all__ = ["ConnectionConfig", "to_client_options"]

"""
Redis pool configuration builder.

Why: Separates configuration assembly from pool creation logic
How: Builds pool settings dict from client options with proper masking
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from redis.asyncio.connection import SSLConnection as AsyncSSLConnection
from redis.asyncio.connection import UnixDomainSocketConnection as AsyncUnixDomainSocketConnection
from redis.connection import SSLConnection, UnixDomainSocketConnection

from ..client_options import NETWORK_TCP, NETWORK_UNIX, ClientOptions
from ..config.errors import ConfigurationError
from .connection_classes import (
    CallableCredentialProvider,
    DialerConnection,
    build_async_connect_func,
    build_connect_func,
)
from .defaults import DEFAULT_PORT, ResolvedOptions, resolve_defaults
from .retry_config import create_retry

logger = logging.getLogger(__name__)

# Options redis-py pools have no equivalent for, with the value meaning "unset".
_UNSUPPORTED_POOL_OPTIONS = {
    "pool_fifo": False,
    "min_idle_conns": 0,
    "max_idle_conns": 0,
    "conn_max_idle_time": 0.0,
    "conn_max_lifetime": 0.0,
    "context_timeout_enabled": False,
}


def parse_address(addr: str) -> Tuple[str, int]:
    """
    Split a ``host:port`` address; bracketed IPv6 hosts are supported.

    Raises:
        ConfigurationError: If the port is not an integer
    """
    host, port_text = addr, ""
    if addr.startswith("["):
        closing = addr.find("]")
        if closing == -1:
            raise ConfigurationError.invalid_format("addr", addr, "[host]:port")
        host = addr[1:closing]
        port_text = addr[closing + 1 :].lstrip(":")
    elif addr.count(":") == 1:
        host, port_text = addr.split(":", 1)

    if not port_text:
        return host or "localhost", DEFAULT_PORT
    try:
        return host or "localhost", int(port_text)
    except ValueError as exc:
        raise ConfigurationError.invalid_format("addr", addr, "host:port") from exc


def _transport_settings(options: ClientOptions, resolved: ResolvedOptions, use_asyncio: bool) -> Dict[str, Any]:
    if options.dialer is not None:
        if use_asyncio:
            raise ConfigurationError.unsupported("A custom dialer", "for asyncio connection pools")
        if options.tls_config is not None:
            logger.debug("Dialer takes priority; tls_config left to the dialer")
        return {
            "connection_class": DialerConnection,
            "dialer": options.dialer,
            "network": resolved.network,
            "addr": resolved.addr,
        }

    if resolved.network == NETWORK_UNIX:
        if not resolved.addr:
            raise ConfigurationError.missing_value("addr", "unix network requires a socket path")
        if options.tls_config is not None:
            logger.debug("tls_config ignored for unix socket connections")
        return {
            "connection_class": AsyncUnixDomainSocketConnection if use_asyncio else UnixDomainSocketConnection,
            "path": resolved.addr,
        }

    if resolved.network != NETWORK_TCP:
        raise ConfigurationError.invalid_value("network", resolved.network, "Expected 'tcp' or 'unix'")

    host, port = parse_address(resolved.addr)
    settings: Dict[str, Any] = {"host": host, "port": port}
    if options.tls_config is not None:
        settings["connection_class"] = AsyncSSLConnection if use_asyncio else SSLConnection
        settings.update(options.tls_config.to_ssl_kwargs())
    return settings


def _max_connections(options: ClientOptions, resolved: ResolvedOptions) -> int:
    if options.max_active_conns > 0:
        if options.min_idle_conns > options.max_active_conns or options.max_idle_conns > options.max_active_conns:
            logger.warning(
                "Idle connection limits exceed max_active_conns=%s (min_idle_conns=%s, max_idle_conns=%s)",
                options.max_active_conns,
                options.min_idle_conns,
                options.max_idle_conns,
            )
        return min(resolved.pool_size, options.max_active_conns)
    return resolved.pool_size


def _log_unsupported(options: ClientOptions, resolved: ResolvedOptions) -> None:
    for name, unset in _UNSUPPORTED_POOL_OPTIONS.items():
        value = getattr(options, name)
        if value != unset:
            logger.debug("Option %s=%r has no redis-py pool equivalent; ignored", name, value)
    if resolved.write_timeout != resolved.read_timeout:
        logger.debug(
            "write_timeout=%r differs from read_timeout=%r; redis-py applies one socket timeout",
            resolved.write_timeout,
            resolved.read_timeout,
        )


def build_pool_settings(options: ClientOptions, *, use_asyncio: bool = False) -> Dict[str, Any]:
    """
    Build blocking connection pool settings from client options.

    Args:
        options: Translated client options
        use_asyncio: Target ``redis.asyncio`` connection classes

    Returns:
        Dictionary of pool settings ready for the BlockingConnectionPool constructor

    Raises:
        ConfigurationError: If the transport options cannot be expressed
    """
    resolved = resolve_defaults(options)

    settings: Dict[str, Any] = _transport_settings(options, resolved, use_asyncio)
    settings.update(
        {
            "db": options.db,
            "protocol": resolved.protocol,
            "socket_timeout": resolved.read_timeout,
            "socket_connect_timeout": resolved.dial_timeout,
            "retry": create_retry(options, use_asyncio=use_asyncio),
            "max_connections": _max_connections(options, resolved),
            "timeout": resolved.pool_timeout,
        }
    )

    if options.client_name:
        settings["client_name"] = options.client_name

    if options.credentials_provider is not None:
        settings["credential_provider"] = CallableCredentialProvider(options.credentials_provider)
    else:
        if options.username:
            settings["username"] = options.username
        if options.password:
            settings["password"] = options.password

    if options.on_connect is not None:
        connect_factory = build_async_connect_func if use_asyncio else build_connect_func
        settings["redis_connect_func"] = connect_factory(options.on_connect)

    if options.disable_identity:
        settings["lib_name"] = None
        settings["lib_version"] = None

    _log_unsupported(options, resolved)
    return settings


def mask_sensitive_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a copy of settings with sensitive values masked.

    Args:
        settings: Original settings dictionary

    Returns:
        Dictionary with password masked
    """
    masked = dict(settings)
    if "password" in masked:
        masked["password"] = "***"
    return masked


__all__ = ["build_pool_settings", "mask_sensitive_settings", "parse_address"]

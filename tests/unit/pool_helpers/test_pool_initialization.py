from unittest.mock import AsyncMock, MagicMock

import pytest
import redis
import redis.asyncio
from redis.exceptions import ConnectionError as RedisConnectionError

from kvoptions.client_options import ClientOptions
from kvoptions.pool_helpers import pool_initialization, pool_validator
from kvoptions.pool_helpers.pool_initialization import (
    create_async_connection_pool,
    create_async_redis_client,
    create_connection_pool,
    create_redis_client,
)
from kvoptions.pool_helpers.pool_validator import verify_pool_connection


def test_create_connection_pool_uses_translated_settings():
    pool = create_connection_pool(ClientOptions(addr="cache:6390", db=3, pool_size=7, password="pw"))

    assert isinstance(pool, redis.BlockingConnectionPool)
    assert pool.max_connections == 7
    assert pool.connection_kwargs["host"] == "cache"
    assert pool.connection_kwargs["port"] == 6390
    assert pool.connection_kwargs["db"] == 3
    assert pool.connection_kwargs["password"] == "pw"


def test_create_redis_client_binds_pool():
    client = create_redis_client(ClientOptions(pool_size=2))

    assert isinstance(client, redis.Redis)
    assert client.connection_pool.max_connections == 2


@pytest.mark.asyncio
async def test_create_async_connection_pool_without_verification(monkeypatch):
    verify = AsyncMock()
    monkeypatch.setattr(pool_initialization, "verify_pool_connection", verify)

    pool = await create_async_connection_pool(ClientOptions(pool_size=5))

    assert isinstance(pool, redis.asyncio.BlockingConnectionPool)
    assert pool.max_connections == 5
    verify.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_async_connection_pool_verifies(monkeypatch):
    verify = AsyncMock()
    monkeypatch.setattr(pool_initialization, "verify_pool_connection", verify)

    pool = await create_async_connection_pool(ClientOptions(), verify=True, verify_timeout=1.0)

    verify.assert_awaited_once_with(pool, timeout=1.0)


@pytest.mark.asyncio
async def test_failed_verification_disconnects_pool(monkeypatch):
    monkeypatch.setattr(pool_initialization, "verify_pool_connection", AsyncMock(side_effect=RuntimeError("down")))
    disconnect = AsyncMock()
    monkeypatch.setattr(redis.asyncio.BlockingConnectionPool, "disconnect", disconnect)

    with pytest.raises(RuntimeError, match="down"):
        await create_async_connection_pool(ClientOptions(), verify=True)

    disconnect.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_async_redis_client(monkeypatch):
    monkeypatch.setattr(pool_initialization, "verify_pool_connection", AsyncMock())

    client = await create_async_redis_client(ClientOptions(pool_size=3))

    assert isinstance(client, redis.asyncio.Redis)
    assert client.connection_pool.max_connections == 3
    await client.aclose()


def _fake_client(monkeypatch, ping):
    client = MagicMock()
    client.ping = ping
    client.aclose = AsyncMock()
    monkeypatch.setattr(pool_validator.redis.asyncio, "Redis", MagicMock(return_value=client))
    return client


@pytest.mark.asyncio
async def test_verify_pool_connection_success(monkeypatch):
    client = _fake_client(monkeypatch, AsyncMock(return_value=True))

    await verify_pool_connection(MagicMock(), timeout=0.5)

    client.ping.assert_awaited_once()
    client.aclose.assert_awaited_once_with(close_connection_pool=False)


@pytest.mark.asyncio
async def test_verify_pool_connection_wraps_redis_errors(monkeypatch):
    client = _fake_client(monkeypatch, AsyncMock(side_effect=RedisConnectionError("refused")))

    with pytest.raises(RuntimeError, match="ConnectionError") as exc_info:
        await verify_pool_connection(MagicMock())

    assert isinstance(exc_info.value.__cause__, RedisConnectionError)
    client.aclose.assert_awaited_once()

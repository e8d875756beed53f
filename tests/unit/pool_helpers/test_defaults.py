import pytest

from kvoptions.client_options import ClientOptions
from kvoptions.pool_helpers import defaults
from kvoptions.pool_helpers.defaults import resolve_defaults


def test_zero_values_resolve_to_runtime_defaults(monkeypatch):
    monkeypatch.setattr(defaults.os, "cpu_count", lambda: 4)

    resolved = resolve_defaults(ClientOptions())

    assert resolved.network == "tcp"
    assert resolved.addr == "localhost:6379"
    assert resolved.protocol == 2
    assert resolved.dial_timeout == pytest.approx(5.0)
    assert resolved.read_timeout == pytest.approx(3.0)
    assert resolved.write_timeout == pytest.approx(3.0)
    assert resolved.max_retries == 3
    assert resolved.min_retry_backoff == pytest.approx(0.008)
    assert resolved.max_retry_backoff == pytest.approx(0.512)
    assert resolved.pool_size == 40
    assert resolved.pool_timeout == pytest.approx(4.0)
    assert resolved.conn_max_idle_time == pytest.approx(1800.0)
    assert resolved.conn_max_lifetime is None


def test_sentinels_disable_behaviour():
    resolved = resolve_defaults(
        ClientOptions(
            max_retries=-1,
            min_retry_backoff=-1,
            max_retry_backoff=-1,
            dial_timeout=-1,
            read_timeout=-1,
            write_timeout=-2,
            conn_max_idle_time=-1,
            conn_max_lifetime=-5,
        )
    )

    assert resolved.max_retries == 0
    assert resolved.min_retry_backoff == 0.0
    assert resolved.max_retry_backoff == 0.0
    assert resolved.dial_timeout is None
    assert resolved.read_timeout is None
    assert resolved.write_timeout is None
    assert resolved.conn_max_idle_time is None
    assert resolved.conn_max_lifetime is None
    assert resolved.pool_timeout == pytest.approx(30.0)


def test_explicit_values_are_kept():
    resolved = resolve_defaults(
        ClientOptions(
            network="unix",
            addr="/var/run/redis.sock",
            protocol=3,
            max_retries=7,
            read_timeout=1.5,
            write_timeout=0,
            pool_size=12,
            pool_timeout=9.0,
            conn_max_lifetime=60.0,
        )
    )

    assert resolved.network == "unix"
    assert resolved.addr == "/var/run/redis.sock"
    assert resolved.protocol == 3
    assert resolved.max_retries == 7
    assert resolved.read_timeout == pytest.approx(1.5)
    assert resolved.write_timeout == pytest.approx(1.5)
    assert resolved.pool_size == 12
    assert resolved.pool_timeout == pytest.approx(9.0)
    assert resolved.conn_max_lifetime == pytest.approx(60.0)


def test_pool_timeout_follows_read_timeout():
    assert resolve_defaults(ClientOptions(read_timeout=2.0)).pool_timeout == pytest.approx(3.0)
    assert resolve_defaults(ClientOptions(pool_timeout=-1)).pool_timeout is None


def test_unix_network_without_address_stays_empty():
    assert resolve_defaults(ClientOptions(network="unix")).addr == ""

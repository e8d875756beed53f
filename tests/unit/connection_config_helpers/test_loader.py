import json

import pytest

from kvoptions.config import ConfigurationError
from kvoptions.connection_config import ConnectionConfig
from kvoptions.connection_config_helpers import loader
from kvoptions.tls import TLSConfig


def _write_config(tmp_path, payload):
    config_dir = tmp_path / "config"
    config_dir.mkdir(exist_ok=True)
    path = config_dir / "redis_config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_empty_environment_yields_zero_config():
    assert loader.load_connection_config() == ConnectionConfig()


def test_redis_url_takes_precedence(monkeypatch, tmp_path):
    _write_config(tmp_path, {"redis": {"addr": "from-file:6379"}})
    monkeypatch.setenv("REDIS_URL", "redis://from-url:6380/1")
    monkeypatch.setenv("REDIS_ADDR", "from-env:6379")

    config = loader.load_connection_config()

    assert config.addr == "from-url:6380"
    assert config.db == 1


def test_environment_values(monkeypatch):
    monkeypatch.setenv("REDIS_ADDR", "cache:6390")
    monkeypatch.setenv("REDIS_PASSWORD", " spaced ")
    monkeypatch.setenv("REDIS_DB", "3")
    monkeypatch.setenv("REDIS_MAX_RETRIES", "-1")
    monkeypatch.setenv("REDIS_READ_TIMEOUT", "-2")
    monkeypatch.setenv("REDIS_DIAL_TIMEOUT", "750ms")
    monkeypatch.setenv("REDIS_POOL_FIFO", "true")
    monkeypatch.setenv("REDIS_MAX_ACTIVE_CONNS", "25")

    config = loader.load_connection_config()

    assert config.addr == "cache:6390"
    assert config.password == " spaced "
    assert config.db == 3
    assert config.max_retries == -1
    assert config.read_timeout == -2
    assert config.dial_timeout == pytest.approx(0.75)
    assert config.pool_fifo is True
    assert config.max_active_conns == 25
    assert config.tls_config is None


def test_host_and_port_build_address(monkeypatch):
    monkeypatch.setenv("REDIS_HOST", "cache")
    monkeypatch.setenv("REDIS_PORT", "6381")

    assert loader.load_connection_config().addr == "cache:6381"


def test_json_file_overlaid_by_environment(monkeypatch, tmp_path):
    _write_config(
        tmp_path,
        {
            "redis": {
                "addr": "file-host:6379",
                "db": 2,
                "pool_size": 8,
                "read_timeout": "2s",
                "write_timeout": -1,
                "disable_identity": True,
                "tls": {"ca_certs": "/etc/ca.pem", "check_hostname": True},
            }
        },
    )
    monkeypatch.setenv("REDIS_POOL_SIZE", "16")

    config = loader.load_connection_config()

    assert config.addr == "file-host:6379"
    assert config.db == 2
    assert config.pool_size == 16
    assert config.read_timeout == pytest.approx(2.0)
    assert config.write_timeout == -1
    assert config.disable_identity is True
    assert config.tls_config == TLSConfig(ca_certs="/etc/ca.pem", check_hostname=True)


def test_config_path_from_environment(monkeypatch, tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"redis": {"client_name": "batch"}}), encoding="utf-8")
    monkeypatch.setenv("REDIS_CONFIG_PATH", str(path))

    assert loader.load_connection_config().client_name == "batch"


def test_missing_explicit_config_path_is_an_error(monkeypatch, tmp_path):
    monkeypatch.setenv("REDIS_CONFIG_PATH", str(tmp_path / "absent.json"))
    monkeypatch.setenv("REDIS_ADDR", "cache:6379")

    with pytest.raises(ConfigurationError, match="REDIS_CONFIG_PATH is missing or empty"):
        loader.load_connection_config()


def test_tls_from_environment(monkeypatch):
    monkeypatch.setenv("REDIS_TLS", "1")
    monkeypatch.setenv("REDIS_TLS_CERT_REQS", "none")

    assert loader.load_connection_config().tls_config == TLSConfig(cert_reqs="none")


def test_tls_disabled_by_environment_overrides_file(monkeypatch, tmp_path):
    _write_config(tmp_path, {"redis": {"tls": True}})
    monkeypatch.setenv("REDIS_TLS", "false")

    assert loader.load_connection_config().tls_config is None


def test_tls_file_settings_merged_with_environment(monkeypatch, tmp_path):
    _write_config(tmp_path, {"redis": {"tls": {"ca_certs": "/etc/ca.pem"}}})
    monkeypatch.setenv("REDIS_TLS_CERTFILE", "/etc/client.pem")

    assert loader.load_connection_config().tls_config == TLSConfig(ca_certs="/etc/ca.pem", certfile="/etc/client.pem")


@pytest.mark.parametrize(
    "payload",
    [
        {"not_redis": {}},
        {"redis": {"unknown": 1}},
        {"redis": {"db": "zero"}},
        {"redis": {"pool_fifo": "yes"}},
        {"redis": {"read_timeout": "soon"}},
        {"redis": {"tls": "on"}},
        {"redis": {"tls": {"cert_reqs": "sometimes"}}},
        {"redis": {"tls": {"pin": "abc"}}},
    ],
)
def test_invalid_json_settings(tmp_path, payload):
    _write_config(tmp_path, payload)

    with pytest.raises(ConfigurationError):
        loader.load_connection_config()


def test_invalid_environment_values(monkeypatch):
    monkeypatch.setenv("REDIS_POOL_SIZE", "many")

    with pytest.raises(ConfigurationError, match="REDIS_POOL_SIZE"):
        loader.load_connection_config()


def test_get_connection_config_is_cached(monkeypatch):
    monkeypatch.setenv("REDIS_ADDR", "first:6379")
    first = loader.get_connection_config()

    monkeypatch.setenv("REDIS_ADDR", "second:6379")
    assert loader.get_connection_config() is first

    loader.get_connection_config.cache_clear()
    assert loader.get_connection_config().addr == "second:6379"

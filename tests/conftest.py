"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Optional

import pytest

from kvoptions.config import runtime
from kvoptions.connection_config_helpers import loader

_REDIS_ENV_NAMES = (
    "REDIS_URL",
    "REDIS_CONFIG_PATH",
    "REDIS_HOST",
    "REDIS_PORT",
    "REDIS_TLS",
    "REDIS_TLS_CA_CERTS",
    "REDIS_TLS_CA_DATA",
    "REDIS_TLS_CERTFILE",
    "REDIS_TLS_KEYFILE",
    "REDIS_TLS_CERT_REQS",
    "REDIS_TLS_CHECK_HOSTNAME",
)


class RecordingLimiter:
    """Limiter double that records every call."""

    def __init__(self, denial: Optional[BaseException] = None, *, raise_denial: bool = False):
        self.denial = denial
        self.raise_denial = raise_denial
        self.allow_calls = 0
        self.results: list[Optional[BaseException]] = []

    def allow(self) -> Optional[BaseException]:
        self.allow_calls += 1
        if self.denial is not None and self.raise_denial:
            raise self.denial
        return self.denial

    def report_result(self, result: Optional[BaseException]) -> None:
        self.results.append(result)


@pytest.fixture
def recording_limiter() -> RecordingLimiter:
    return RecordingLimiter()


@pytest.fixture(autouse=True)
def isolated_redis_environment(monkeypatch, tmp_path):
    """Keep host environment and config files out of configuration tests."""
    for name in _REDIS_ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    for name in loader.SCALAR_FIELDS:
        monkeypatch.delenv(f"REDIS_{name.upper()}", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)

    runtime._DEFAULT_VALUES = {}
    loader.get_connection_config.cache_clear()
    yield
    runtime._DEFAULT_VALUES = None
    loader.get_connection_config.cache_clear()


@pytest.fixture
def limiter_factory():
    return RecordingLimiter

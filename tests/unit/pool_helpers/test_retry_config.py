import pytest
from redis.asyncio.retry import Retry as AsyncRetry
from redis.backoff import ExponentialBackoff, NoBackoff
from redis.retry import Retry as SyncRetry

from kvoptions.client_options import ClientOptions
from kvoptions.pool_helpers.retry_config import RETRY_ON_CONNECTION_ERROR, create_retry


def test_default_retry_uses_exponential_backoff():
    retry = create_retry(ClientOptions())

    assert isinstance(retry, SyncRetry)
    assert retry._retries == 3
    assert isinstance(retry._backoff, ExponentialBackoff)
    assert retry._backoff._base == pytest.approx(0.008)
    assert retry._backoff._cap == pytest.approx(0.512)
    assert set(RETRY_ON_CONNECTION_ERROR) <= set(retry._supported_errors)


def test_disabled_retries_and_backoff():
    retry = create_retry(ClientOptions(max_retries=-1, min_retry_backoff=-1, max_retry_backoff=-1))

    assert retry._retries == 0
    assert isinstance(retry._backoff, NoBackoff)


def test_explicit_bounds_and_async_variant():
    retry = create_retry(ClientOptions(max_retries=5, min_retry_backoff=0.1, max_retry_backoff=2.0), use_asyncio=True)

    assert isinstance(retry, AsyncRetry)
    assert retry._retries == 5
    assert retry._backoff._base == pytest.approx(0.1)
    assert retry._backoff._cap == pytest.approx(2.0)

"""
redis-cache-store — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import AsyncGenerator, AsyncIterator, Generator, Iterable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from redis.asyncio import Redis

TEST_REDIS_URL = os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")

# Keep developer settings out of the tests
for _name in (
    "REDIS_URL",
    "REDIS_HOST",
    "REDIS_PORT",
    "REDIS_DB",
    "REDIS_USERNAME",
    "REDIS_PASSWORD",
    "REDIS_SOCKET_TIMEOUT",
    "REDIS_MAX_CONNECTIONS",
    "CACHE_TTL_MS",
):
    os.environ.pop(_name, None)
os.environ["LOG_LEVEL"] = "DEBUG"


async def aiter_keys(keys: Iterable[Any]) -> AsyncIterator[Any]:
    """Async iterator standing in for Redis.scan_iter."""
    for key in keys:
        yield key


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return TEST_REDIS_URL


@pytest.fixture
def mock_client() -> MagicMock:
    """
    Mocked redis.asyncio.Redis client.

    Command methods are AsyncMocks; pipeline() returns a MagicMock whose
    execute() is awaitable, matching how redis-py buffers pipeline commands.
    """
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.mset = AsyncMock(return_value=True)
    client.mget = AsyncMock(return_value=[])
    client.delete = AsyncMock(return_value=0)
    client.unlink = AsyncMock(side_effect=lambda *keys: len(keys))
    client.pttl = AsyncMock(return_value=-2)
    client.keys = AsyncMock(return_value=[])
    client.flushdb = AsyncMock(return_value=True)
    client.aclose = AsyncMock(return_value=None)
    client.connection_pool.disconnect = AsyncMock(return_value=None)
    client.scan_iter = MagicMock(side_effect=lambda **kwargs: aiter_keys([]))

    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[])
    client.pipeline = MagicMock(return_value=pipe)
    return client


@pytest_asyncio.fixture
async def redis_client(test_redis_url: str) -> AsyncGenerator[Redis, None]:
    """
    Create a raw Redis client for testing.

    Automatically skips tests if Redis is not available.
    Clears the test database before and after each test.
    """
    client = Redis.from_url(test_redis_url, decode_responses=True)

    try:
        await client.ping()
    except Exception as e:
        await client.aclose()
        pytest.skip(f"Redis not available for testing: {e}")

    await client.flushdb()

    yield client

    try:
        await client.flushdb()
    finally:
        await client.aclose()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable the config loader reads."""
    for name in (
        "REDIS_URL",
        "REDIS_HOST",
        "REDIS_PORT",
        "REDIS_DB",
        "REDIS_USERNAME",
        "REDIS_PASSWORD",
        "REDIS_SOCKET_TIMEOUT",
        "REDIS_MAX_CONNECTIONS",
        "CACHE_TTL_MS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample data for store testing."""
    return {
        "simple_string": "hello",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": True,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_store_factory() -> Generator[None, None, None]:
    """Reset the store factory after each test to prevent state leakage."""
    yield
    from redis_cache_store.factory import reset_store_factory

    reset_store_factory()

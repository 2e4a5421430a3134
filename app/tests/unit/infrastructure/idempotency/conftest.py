"""Fixtures for idempotency store tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.idempotency.memory import InMemoryIdempotencyStore
from infrastructure.idempotency.redis_store import RedisIdempotencyStore
from integrations.redis import RedisClient


@pytest.fixture
def memory_store(clock):
    """In-process store driven by the fake clock; the sweeper is not started."""
    store = InMemoryIdempotencyStore(default_ttl_seconds=3600, clock=clock)
    yield store
    store.close()


@pytest.fixture
def mock_redis_client():
    """RedisClient double returning OperationResults."""
    client = MagicMock(spec=RedisClient)
    client.host = "redis.test"
    client.port = 6380
    return client


@pytest.fixture
def redis_store(mock_redis_client, clock):
    return RedisIdempotencyStore(
        client=mock_redis_client,
        default_ttl_seconds=3600,
        key_prefix="idempotency:",
        clock=clock,
    )

"""Fixtures for server module unit tests."""

from unittest.mock import MagicMock

import pytest

from api.dependencies.rate_limits import get_limiter
from infrastructure.idempotency import IdempotencyStore


@pytest.fixture(autouse=True)
def reset_rate_limits():
    get_limiter().reset()
    yield


@pytest.fixture
def mock_store():
    """Create a mock idempotency store."""
    store = MagicMock(spec=IdempotencyStore)
    return store

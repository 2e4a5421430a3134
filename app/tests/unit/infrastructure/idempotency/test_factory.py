"""Unit tests for idempotency store factory."""

from unittest.mock import patch

import pytest

from infrastructure.idempotency.factory import create_store
from infrastructure.idempotency.memory import InMemoryIdempotencyStore
from infrastructure.idempotency.redis_store import RedisIdempotencyStore

pytestmark = pytest.mark.unit


class TestCreateStore:
    """Tests for store factory."""

    def test_in_process_backend(self, make_settings):
        settings = make_settings(
            IDEMPOTENCY_TTL_SECONDS=120, IDEMPOTENCY_SWEEP_INTERVAL_SECONDS=15
        )

        store = create_store(settings)

        assert isinstance(store, InMemoryIdempotencyStore)
        assert store.default_ttl_seconds == 120
        assert store.get_stats()["sweep_interval_seconds"] == 15

    @patch("infrastructure.idempotency.factory.RedisClient")
    def test_shared_backend(self, mock_client_cls, make_settings):
        mock_client_cls.from_settings.return_value.host = "redis.test"
        mock_client_cls.from_settings.return_value.port = 6380
        settings = make_settings(
            IDEMPOTENCY_BACKEND="shared", IDEMPOTENCY_KEY_PREFIX="svc:"
        )

        store = create_store(settings)

        assert isinstance(store, RedisIdempotencyStore)
        assert store.key_prefix == "svc:"
        mock_client_cls.from_settings.assert_called_once_with(settings.redis)

    def test_no_singleton(self, settings):
        assert create_store(settings) is not create_store(settings)

    def test_store_not_started(self, settings):
        store = create_store(settings)
        assert store.get_stats()["sweeper_running"] is False

"""Unit tests for the shared (Redis) idempotency store."""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from infrastructure.idempotency.exceptions import (
    BackendTimeoutError,
    BackendUnavailableError,
)
from infrastructure.idempotency.redis_store import RedisIdempotencyStore
from infrastructure.operations import OperationResult
from infrastructure.operations.classifiers import CONNECTION_ERROR, REDIS_ERROR, TIMEOUT

pytestmark = pytest.mark.unit


def millis(moment):
    return (moment - datetime(1970, 1, 1, tzinfo=timezone.utc)) // timedelta(milliseconds=1)


def claim_value(created_at, expires_at):
    return f"{millis(created_at)}:{millis(expires_at)}"


class ClaimOnlyRedisClient:
    """Thread-safe RedisClient double that sets a key only when it is absent."""

    host = "redis.test"
    port = 6380

    def __init__(self):
        self._lock = threading.Lock()
        self._values = {}

    def set_if_absent(self, key, value, ttl_seconds):
        with self._lock:
            if key in self._values:
                return OperationResult.success(data=False)
            self._values[key] = (value, ttl_seconds * 1000)
            return OperationResult.success(data=True)

    def get_with_ttl(self, key):
        with self._lock:
            value, pttl = self._values.get(key, (None, -2))
        return OperationResult.success(data=(value, pttl))

    def close(self):
        pass


class TestClaim:
    def test_new_key_claimed_with_set_nx(self, redis_store, mock_redis_client, clock):
        mock_redis_client.set_if_absent.return_value = OperationResult.success(data=True)

        is_new, record = redis_store.check_and_insert("billing:order-1", 60)

        assert is_new is True
        assert record.created_at == clock.now
        assert record.expires_at == clock.now + timedelta(seconds=60)
        mock_redis_client.set_if_absent.assert_called_once_with(
            "idempotency:billing:order-1",
            claim_value(clock.now, clock.now + timedelta(seconds=60)),
            60,
        )
        mock_redis_client.get_with_ttl.assert_not_called()

    def test_timestamps_truncated_to_milliseconds(self, mock_redis_client, clock):
        clock.now = datetime(2026, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
        store = RedisIdempotencyStore(client=mock_redis_client, clock=clock)
        mock_redis_client.set_if_absent.return_value = OperationResult.success(data=True)

        _, record = store.check_and_insert("order-1", 60)

        assert record.created_at == datetime(2026, 1, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)
        assert record.expires_at == record.created_at + timedelta(seconds=60)

    def test_default_ttl_used_when_none(self, redis_store, mock_redis_client):
        mock_redis_client.set_if_absent.return_value = OperationResult.success(data=True)

        redis_store.check_and_insert("order-1")

        assert mock_redis_client.set_if_absent.call_args.args[2] == 3600

    def test_record_carries_raw_key_and_namespace(self, redis_store, mock_redis_client):
        mock_redis_client.set_if_absent.return_value = OperationResult.success(data=True)

        _, record = redis_store.check_and_insert(
            "billing:order-1", raw_key="order-1", namespace="billing"
        )

        assert record.composite_key == "billing:order-1"
        assert record.raw_key == "order-1"
        assert record.namespace == "billing"


class TestDuplicate:
    def test_duplicate_reports_winner_timestamps(self, redis_store, mock_redis_client, clock):
        winner_created = clock.now - timedelta(seconds=30)
        winner_expires = winner_created + timedelta(seconds=60)
        mock_redis_client.set_if_absent.return_value = OperationResult.success(data=False)
        mock_redis_client.get_with_ttl.return_value = OperationResult.success(
            data=(claim_value(winner_created, winner_expires), 30_000)
        )

        is_new, record = redis_store.check_and_insert("order-1", 600)

        assert is_new is False
        assert record.created_at == winner_created
        assert record.expires_at == winner_expires
        mock_redis_client.get_with_ttl.assert_called_once_with("idempotency:order-1")

    @pytest.mark.parametrize(
        "read_result",
        [
            OperationResult.transient_error("timed out", error_code=TIMEOUT),
            OperationResult.success(data=(None, -2)),
            OperationResult.success(data=("1718000000000:1718000060000", -1)),
            OperationResult.success(data=("1718000000000", 5000)),
            OperationResult.success(data=("not:a-number", 5000)),
        ],
    )
    def test_ambiguous_read_keeps_duplicate_verdict(
        self, redis_store, mock_redis_client, clock, read_result
    ):
        mock_redis_client.set_if_absent.return_value = OperationResult.success(data=False)
        mock_redis_client.get_with_ttl.return_value = read_result

        is_new, record = redis_store.check_and_insert("order-1", 60)

        assert is_new is False
        assert record.created_at == clock.now
        assert record.expires_at == clock.now


class TestConcurrentClaims:
    @pytest.fixture
    def shared_store(self, clock):
        clock.now = datetime(2026, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
        return RedisIdempotencyStore(client=ClaimOnlyRedisClient(), clock=clock)

    def test_exactly_one_winner_with_winner_timestamps(self, shared_store):
        workers = 8
        barrier = threading.Barrier(workers)

        def attempt(_):
            barrier.wait()
            return shared_store.check_and_insert("order-1", 60)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(attempt, range(workers)))

        winners = [record for is_new, record in outcomes if is_new]
        assert len(winners) == 1
        for is_new, record in outcomes:
            if not is_new:
                assert record.created_at == winners[0].created_at
                assert record.expires_at == winners[0].expires_at

    def test_later_duplicate_keeps_winner_timestamps(self, shared_store, clock):
        _, winner = shared_store.check_and_insert("order-1", 60)
        clock.advance(0.000789)

        is_new, duplicate = shared_store.check_and_insert("order-1", 600)

        assert is_new is False
        assert duplicate.created_at == winner.created_at
        assert duplicate.expires_at == winner.expires_at


class TestBackendErrors:
    def test_timeout_raises_backend_timeout(self, redis_store, mock_redis_client):
        mock_redis_client.set_if_absent.return_value = OperationResult.transient_error(
            "Timeout reading from socket", error_code=TIMEOUT
        )

        with pytest.raises(BackendTimeoutError) as exc_info:
            redis_store.check_and_insert("order-1")
        assert exc_info.value.error_code == TIMEOUT

    @pytest.mark.parametrize("error_code", [CONNECTION_ERROR, REDIS_ERROR])
    def test_other_failures_raise_backend_unavailable(
        self, redis_store, mock_redis_client, error_code
    ):
        mock_redis_client.set_if_absent.return_value = OperationResult.permanent_error(
            "Connection refused", error_code=error_code
        )

        with pytest.raises(BackendUnavailableError) as exc_info:
            redis_store.check_and_insert("order-1")
        assert not isinstance(exc_info.value, BackendTimeoutError)
        assert exc_info.value.error_code == error_code


class TestHealthAndLifecycle:
    def test_health_check_pings(self, redis_store, mock_redis_client):
        mock_redis_client.ping.return_value = OperationResult.success()

        assert redis_store.health_check().is_success
        mock_redis_client.ping.assert_called_once()

    def test_health_check_reports_failure(self, redis_store, mock_redis_client):
        mock_redis_client.ping.return_value = OperationResult.transient_error(
            "Connection refused", error_code=CONNECTION_ERROR
        )

        assert not redis_store.health_check().is_success

    def test_close_closes_client(self, redis_store, mock_redis_client):
        redis_store.close()
        mock_redis_client.close.assert_called_once()

    def test_stats(self, redis_store):
        stats = redis_store.get_stats()
        assert stats["backend"] == "shared"
        assert stats["host"] == "redis.test"
        assert stats["port"] == 6380
        assert stats["key_prefix"] == "idempotency:"

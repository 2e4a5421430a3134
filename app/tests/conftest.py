from datetime import datetime, timedelta, timezone

import pytest

from infrastructure.configuration import (
    IdempotencySettings,
    RedisSettings,
    ServerSettings,
    Settings,
)

TEST_API_KEY = "test-api-key"


class FakeClock:
    """Controllable UTC clock for expiry tests."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_settings():
    """Build Settings with explicit sub-settings, ignoring the environment."""

    def _make(**overrides) -> Settings:
        idempotency = {
            "IDEMPOTENCY_BACKEND": "in-process",
            "IDEMPOTENCY_TTL_SECONDS": 3600,
            "IDEMPOTENCY_SWEEP_INTERVAL_SECONDS": 60,
        }
        server = {"API_KEY": TEST_API_KEY, "API_KEY_FILE": None}
        redis = {"REDIS_HOST": "redis.test", "REDIS_PORT": 6380}
        for key, value in overrides.items():
            if key.startswith("IDEMPOTENCY_"):
                idempotency[key] = value
            elif key.startswith("REDIS_"):
                redis[key] = value
            else:
                server[key] = value
        return Settings(
            PREFIX="test",
            idempotency=IdempotencySettings(**idempotency),
            redis=RedisSettings(**redis),
            server=ServerSettings(**server),
        )

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()

"""Redis integration used by the shared idempotency backend."""

from integrations.redis.client import RedisClient

__all__ = ["RedisClient"]

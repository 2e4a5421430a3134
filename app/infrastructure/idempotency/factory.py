"""Idempotency store factory."""

from typing import TYPE_CHECKING

from infrastructure.idempotency.memory import InMemoryIdempotencyStore
from infrastructure.idempotency.redis_store import RedisIdempotencyStore
from infrastructure.idempotency.store import IdempotencyStore
from infrastructure.logging import get_module_logger
from integrations.redis import RedisClient

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


def create_store(settings: "Settings") -> IdempotencyStore:
    """Build the idempotency store selected by IDEMPOTENCY_BACKEND.

    The caller owns the returned store: start() it before use and close() it
    at shutdown.

    Returns:
        InMemoryIdempotencyStore for 'in-process', RedisIdempotencyStore for 'shared'.
    """
    idempotency = settings.idempotency
    backend = idempotency.IDEMPOTENCY_BACKEND

    if backend == "shared":
        store: IdempotencyStore = RedisIdempotencyStore(
            client=RedisClient.from_settings(settings.redis),
            default_ttl_seconds=idempotency.IDEMPOTENCY_TTL_SECONDS,
            key_prefix=idempotency.IDEMPOTENCY_KEY_PREFIX,
        )
    else:
        store = InMemoryIdempotencyStore(
            default_ttl_seconds=idempotency.IDEMPOTENCY_TTL_SECONDS,
            sweep_interval_seconds=idempotency.IDEMPOTENCY_SWEEP_INTERVAL_SECONDS,
        )

    logger.info("initialized_idempotency_store", backend=backend)
    return store

"""Infrastructure idempotency store.

Lets callers atomically claim an idempotency key exactly once within a TTL.
Two interchangeable backends provide the same at-most-one-winner semantics:

- in-process: ConcurrentMap with a periodic expiry sweep (single instance)
- shared: Redis SET NX EX (every instance shares one key space)

Usage:

    from infrastructure.idempotency import IdempotencyService, create_store

    store = create_store(settings)
    store.start()
    service = IdempotencyService(store)

    result = service.check("order-1", namespace="payments", ttl_seconds=600)
    if result.is_duplicate:
        # Another call already claimed this key; skip the operation
        ...

    store.close()
"""

from infrastructure.idempotency.exceptions import (
    AmbiguousStateError,
    BackendTimeoutError,
    BackendUnavailableError,
    IdempotencyError,
    IdempotencyValidationError,
)
from infrastructure.idempotency.factory import create_store
from infrastructure.idempotency.key_builder import IdempotencyKeyBuilder, compose_key
from infrastructure.idempotency.memory import InMemoryIdempotencyStore
from infrastructure.idempotency.models import IdempotencyRecord, IdempotencyResult
from infrastructure.idempotency.redis_store import RedisIdempotencyStore
from infrastructure.idempotency.service import IdempotencyService
from infrastructure.idempotency.store import IdempotencyStore

__all__ = [
    "AmbiguousStateError",
    "BackendTimeoutError",
    "BackendUnavailableError",
    "IdempotencyError",
    "IdempotencyValidationError",
    "IdempotencyKeyBuilder",
    "IdempotencyRecord",
    "IdempotencyResult",
    "IdempotencyService",
    "IdempotencyStore",
    "InMemoryIdempotencyStore",
    "RedisIdempotencyStore",
    "compose_key",
    "create_store",
]

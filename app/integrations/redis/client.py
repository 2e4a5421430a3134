"""Redis client for the shared idempotency backend.

This module provides a Redis CLIENT connection used by the shared idempotency
store. Every instance of the service connects to the same Redis database, so a
key claimed by one instance is seen as a duplicate by all others.

Features:
- Connection pooling with bounded per-call socket timeouts
- Standardized error handling via OperationResult
- Atomic set-if-absent with TTL (SET NX EX)
- Value and remaining TTL read in a single MULTI/EXEC round trip

Usage:
    from integrations.redis import RedisClient

    client = RedisClient.from_settings(settings.redis)

    result = client.set_if_absent("idempotency:order-1", "1718000000000", ttl_seconds=3600)
    if result.is_success and result.data:
        print("Key claimed")

    client.close()
"""

from typing import Optional, TYPE_CHECKING

from redis import Redis, ConnectionPool, RedisError  # type: ignore

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult, classify_redis_error

if TYPE_CHECKING:
    from infrastructure.configuration import RedisSettings

logger = get_module_logger()


class RedisClient:
    """Pooled Redis connection returning OperationResult from every call.

    Attributes:
        host: Redis host name
        port: Redis port
        timeout_seconds: Socket (connect and read) timeout applied to each call
    """

    def __init__(
        self,
        host: str,
        port: int,
        db: int = 0,
        password: Optional[str] = None,
        timeout_seconds: float = 2.0,
        max_connections: int = 10,
    ):
        self.host = host
        self.port = port
        self.timeout_seconds = timeout_seconds

        # No retry_on_timeout: a retried SET NX whose first attempt landed
        # would report the winner as a duplicate of itself.
        self._pool = ConnectionPool(
            host=host,
            port=port,
            db=db,
            password=password,
            decode_responses=True,
            max_connections=max_connections,
            socket_timeout=timeout_seconds,
            socket_connect_timeout=timeout_seconds,
            health_check_interval=30,
        )
        self._client = Redis(connection_pool=self._pool)
        logger.info(
            "redis_connection_pool_created",
            host=host,
            port=port,
            db=db,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_settings(cls, redis_settings: "RedisSettings") -> "RedisClient":
        """Build a client from RedisSettings."""
        return cls(
            host=redis_settings.REDIS_HOST,
            port=redis_settings.REDIS_PORT,
            db=redis_settings.REDIS_DB,
            password=redis_settings.REDIS_PASSWORD,
            timeout_seconds=redis_settings.REDIS_TIMEOUT_SECONDS,
            max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
        )

    def set_if_absent(self, key: str, value: str, ttl_seconds: int) -> OperationResult:
        """Set key to value with a TTL only if the key does not exist.

        Args:
            key: The key to claim
            value: The value to store
            ttl_seconds: Expiration time in seconds

        Returns:
            OperationResult: data=True if the key was set, False if it already existed
        """
        try:
            was_set = self._client.set(key, value, nx=True, ex=ttl_seconds)
        except (RedisError, OSError) as e:
            result = classify_redis_error(e)
            logger.error(
                "redis_set_if_absent_failed",
                key=key,
                error=str(e),
                error_code=result.error_code,
            )
            return result

        logger.debug("redis_set_if_absent", key=key, was_set=bool(was_set))
        return OperationResult.success(data=bool(was_set))

    def get_with_ttl(self, key: str) -> OperationResult:
        """Read a value and its remaining TTL in milliseconds.

        Both commands run in one MULTI/EXEC transaction so they describe the
        same version of the key.

        Args:
            key: The key to read

        Returns:
            OperationResult: data=(value, pttl). value is None and pttl is -2
            when the key does not exist; pttl is -1 when it has no TTL.
        """
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.get(key)
            pipe.pttl(key)
            value, pttl = pipe.execute()
        except (RedisError, OSError) as e:
            result = classify_redis_error(e)
            logger.warning(
                "redis_get_with_ttl_failed",
                key=key,
                error=str(e),
                error_code=result.error_code,
            )
            return result

        logger.debug("redis_get_with_ttl", key=key, pttl_ms=pttl)
        return OperationResult.success(data=(value, pttl))

    def ping(self) -> OperationResult:
        """Check Redis connection health."""
        try:
            self._client.ping()
        except (RedisError, OSError) as e:
            result = classify_redis_error(e)
            logger.error(
                "redis_health_check_failed",
                error=str(e),
                error_code=result.error_code,
            )
            return result

        return OperationResult.success(message="Redis connection healthy")

    def close(self) -> None:
        """Release every pooled connection."""
        self._pool.disconnect()
        logger.info("redis_connection_pool_closed", host=self.host, port=self.port)

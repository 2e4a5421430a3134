"""Redis-backed (shared) idempotency store."""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from infrastructure.idempotency.exceptions import (
    AmbiguousStateError,
    BackendTimeoutError,
    BackendUnavailableError,
)
from infrastructure.idempotency.models import IdempotencyRecord
from infrastructure.idempotency.store import IdempotencyStore
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult
from infrastructure.operations.classifiers import TIMEOUT
from integrations.redis import RedisClient

logger = get_module_logger()

DEFAULT_TTL_SECONDS = 3600
DEFAULT_KEY_PREFIX = "idempotency:"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)
_VALUE_SEPARATOR = ":"


def _to_millis(moment: datetime) -> int:
    return (moment - _EPOCH) // _MILLISECOND


def _from_millis(millis: int) -> datetime:
    return _EPOCH + millis * _MILLISECOND


def _encode_claim(created_at: datetime, expires_at: datetime) -> str:
    return f"{_to_millis(created_at)}{_VALUE_SEPARATOR}{_to_millis(expires_at)}"


class RedisIdempotencyStore(IdempotencyStore):
    """Idempotency store shared by every instance through Redis.

    Keys are claimed with a single `SET key <created ms>:<expires ms> NX EX ttl`,
    so the at-most-one-winner guarantee is exactly Redis's own SET NX atomicity.

    Timestamps are truncated to whole milliseconds before the claim is written,
    so the winner and every duplicate report identical values.

    For duplicates the winner's timestamps are read back afterwards (GET and
    PTTL in one transaction). That read is not atomic with the SET; if it
    fails or the key expires in between, the duplicate verdict stands and
    `now` is reported for both timestamps.

    Stored layout:
    - key: <key_prefix><composite_key>
    - value: "<created_at ms>:<expires_at ms>" in epoch milliseconds
    - TTL: native Redis expiry
    """

    def __init__(
        self,
        client: RedisClient,
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize shared store.

        Args:
            client: Connected RedisClient; owned and closed by this store.
            default_ttl_seconds: TTL applied when a call passes none.
            key_prefix: Prefix for every Redis key written.
            clock: Source of timezone-aware "now" values.
        """
        self._client = client
        self.default_ttl_seconds = default_ttl_seconds
        self.key_prefix = key_prefix
        self._clock = clock
        logger.info(
            "initialized_redis_idempotency_store",
            host=client.host,
            port=client.port,
            key_prefix=key_prefix,
            default_ttl_seconds=default_ttl_seconds,
        )

    def close(self) -> None:
        self._client.close()

    def check_and_insert(
        self,
        composite_key: str,
        ttl_seconds: Optional[int] = None,
        raw_key: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> Tuple[bool, IdempotencyRecord]:
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl_seconds
        redis_key = f"{self.key_prefix}{composite_key}"
        raw_key = raw_key if raw_key is not None else composite_key
        now = _from_millis(_to_millis(self._clock()))
        expires_at = now + timedelta(seconds=ttl)

        result = self._client.set_if_absent(
            redis_key, _encode_claim(now, expires_at), ttl
        )
        if not result.is_success:
            self._raise_backend_error(result, composite_key)

        if result.data:
            logger.debug("idempotency_key_claimed", key=composite_key, ttl_seconds=ttl)
            return True, IdempotencyRecord(
                composite_key=composite_key,
                raw_key=raw_key,
                namespace=namespace,
                created_at=now,
                expires_at=expires_at,
            )

        try:
            created_at, expires_at = self._read_claim(redis_key)
        except AmbiguousStateError as e:
            logger.warning(
                "idempotency_ambiguous_state",
                key=composite_key,
                reason=str(e),
            )
            created_at, expires_at = now, now

        logger.debug("idempotency_duplicate_detected", key=composite_key)
        return False, IdempotencyRecord(
            composite_key=composite_key,
            raw_key=raw_key,
            namespace=namespace,
            created_at=created_at,
            expires_at=expires_at,
        )

    def _read_claim(self, redis_key: str) -> Tuple[datetime, datetime]:
        """Reconstruct the live claim's timestamps.

        Raises:
            AmbiguousStateError: If the read failed, the key vanished or its
                value cannot be parsed.
        """
        result = self._client.get_with_ttl(redis_key)
        if not result.is_success:
            raise AmbiguousStateError(f"metadata read failed: {result.message}")

        value, pttl = result.data
        if value is None or pttl is None or pttl <= 0:
            raise AmbiguousStateError("key expired before its metadata was read")

        try:
            created_ms, expires_ms = str(value).split(_VALUE_SEPARATOR)
            return _from_millis(int(created_ms)), _from_millis(int(expires_ms))
        except ValueError as e:
            raise AmbiguousStateError(f"unparsable claim value: {value!r}") from e

    def _raise_backend_error(self, result: OperationResult, composite_key: str) -> None:
        logger.error(
            "idempotency_backend_unavailable",
            key=composite_key,
            error=result.message,
            error_code=result.error_code,
        )
        if result.error_code == TIMEOUT:
            raise BackendTimeoutError(result.message, error_code=result.error_code)
        raise BackendUnavailableError(result.message, error_code=result.error_code)

    def health_check(self) -> OperationResult:
        return self._client.ping()

    def get_stats(self) -> Dict[str, Any]:
        return {
            "backend": "shared",
            "host": self._client.host,
            "port": self._client.port,
            "key_prefix": self.key_prefix,
            "default_ttl_seconds": self.default_ttl_seconds,
        }

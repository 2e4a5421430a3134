"""In-process idempotency store."""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from infrastructure.idempotency.concurrent_map import ConcurrentMap
from infrastructure.idempotency.models import IdempotencyRecord
from infrastructure.idempotency.store import IdempotencyStore
from infrastructure.idempotency.sweeper import ExpirySweeper
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()

DEFAULT_TTL_SECONDS = 3600
DEFAULT_SWEEP_INTERVAL_SECONDS = 60


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryIdempotencyStore(IdempotencyStore):
    """Idempotency store backed by a process-local ConcurrentMap.

    Claims are decided with put-if-absent; an expired claim is superseded with
    compare-and-replace, so exactly one of any number of concurrent callers
    wins. A background ExpirySweeper reclaims memory from expired records with
    compare-and-remove. Duplicate detection compares expiry times on every
    call and never relies on the sweep having run.

    Records do not survive a process restart.
    """

    def __init__(
        self,
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        sweep_interval_seconds: int = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize in-process store.

        Args:
            default_ttl_seconds: TTL applied when a call passes none.
            sweep_interval_seconds: Seconds between expiry sweeps once started.
            clock: Source of timezone-aware "now" values.
        """
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._records: ConcurrentMap[IdempotencyRecord] = ConcurrentMap()
        self._sweeper = ExpirySweeper(self.sweep_expired, sweep_interval_seconds)
        logger.info(
            "initialized_in_process_idempotency_store",
            default_ttl_seconds=default_ttl_seconds,
            sweep_interval_seconds=sweep_interval_seconds,
        )

    def start(self) -> None:
        self._sweeper.start()

    def close(self) -> None:
        self._sweeper.stop()

    def check_and_insert(
        self,
        composite_key: str,
        ttl_seconds: Optional[int] = None,
        raw_key: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> Tuple[bool, IdempotencyRecord]:
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl_seconds
        now = self._clock()
        new_record = IdempotencyRecord(
            composite_key=composite_key,
            raw_key=raw_key if raw_key is not None else composite_key,
            namespace=namespace,
            created_at=now,
            expires_at=now + timedelta(seconds=ttl),
        )

        existing = self._records.put_if_absent(composite_key, new_record)
        if existing is None:
            logger.debug("idempotency_key_claimed", key=composite_key, ttl_seconds=ttl)
            return True, new_record

        if not existing.is_expired(now):
            logger.debug("idempotency_duplicate_detected", key=composite_key)
            return False, existing

        if self._records.replace(composite_key, existing, new_record):
            logger.debug("idempotency_expired_key_replaced", key=composite_key)
            return True, new_record

        # Lost the replace: either another caller superseded the expired
        # record, or the sweep removed it before we got there.
        current = self._records.get(composite_key)
        if current is not None:
            logger.debug("idempotency_duplicate_detected", key=composite_key)
            return False, current

        existing = self._records.put_if_absent(composite_key, new_record)
        if existing is None:
            logger.debug("idempotency_key_claimed", key=composite_key, ttl_seconds=ttl)
            return True, new_record
        return False, existing

    def sweep_expired(self) -> int:
        """Remove every record that expired before now.

        A record is only removed if it is still the exact record observed as
        expired, so a concurrently inserted replacement is never lost.

        Returns:
            Number of records removed.
        """
        now = self._clock()
        removed = 0
        for key, record in self._records.items():
            if record.is_expired(now) and self._records.remove(key, record):
                removed += 1
        logger.debug(
            "idempotency_sweep_pass",
            removed_count=removed,
            remaining_count=len(self._records),
        )
        return removed

    def get(self, composite_key: str) -> Optional[IdempotencyRecord]:
        """Return the stored record for composite_key, expired or not."""
        return self._records.get(composite_key)

    def health_check(self) -> OperationResult:
        return OperationResult.success(message="In-process store healthy")

    def get_stats(self) -> Dict[str, Any]:
        now = self._clock()
        total = 0
        expired = 0
        for _, record in self._records.items():
            total += 1
            if record.is_expired(now):
                expired += 1
        return {
            "backend": "in-process",
            "total_entries": total,
            "expired_entries": expired,
            "active_entries": total - expired,
            "default_ttl_seconds": self.default_ttl_seconds,
            "sweep_interval_seconds": self._sweeper.interval_seconds,
            "sweeper_running": self._sweeper.is_running,
        }

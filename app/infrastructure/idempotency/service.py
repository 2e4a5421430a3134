"""Idempotency service for dependency injection.

Validates caller input, composes the storage key, consults the store and
assembles the caller-facing result with timing metadata.
"""

import time
from typing import Any, Dict, Optional

from infrastructure.idempotency.exceptions import IdempotencyValidationError
from infrastructure.idempotency.key_builder import compose_key, validate_key
from infrastructure.idempotency.models import IdempotencyResult
from infrastructure.idempotency.store import IdempotencyStore
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()


class IdempotencyService:
    """Class-based idempotency service.

    Wraps an IdempotencyStore so routes and tests depend on one injectable
    object rather than on a store implementation.

    Usage:
        from infrastructure.services import IdempotencyServiceDep

        @router.post("/payments")
        def create_payment(idempotency: IdempotencyServiceDep, request_id: str):
            result = idempotency.check(request_id, namespace="payments")
            if result.is_duplicate:
                return {"status": "already processed"}
            ...
    """

    def __init__(self, store: IdempotencyStore):
        self._store = store

    def check(
        self,
        idempotency_key: str,
        namespace: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
    ) -> IdempotencyResult:
        """Atomically claim idempotency_key within namespace.

        Args:
            idempotency_key: Caller-supplied key (1-256 characters)
            namespace: Optional namespace (at most 128 characters)
            ttl_seconds: Positive claim lifetime; the store default when None

        Returns:
            IdempotencyResult with is_new=True for the single winning call and
            the winner's timestamps for every duplicate.

        Raises:
            IdempotencyValidationError: Malformed key, namespace or TTL.
            BackendUnavailableError: Shared backend unreachable.
            BackendTimeoutError: Shared backend call timed out.
        """
        self._validate(idempotency_key, namespace, ttl_seconds)

        started_ns = time.perf_counter_ns()
        composite_key = compose_key(idempotency_key, namespace)
        is_new, record = self._store.check_and_insert(
            composite_key,
            ttl_seconds,
            raw_key=idempotency_key,
            namespace=namespace,
        )
        elapsed_ns = time.perf_counter_ns() - started_ns

        logger.info(
            "idempotency_check_completed",
            key=composite_key,
            is_duplicate=not is_new,
            processing_time_ns=elapsed_ns,
        )
        return IdempotencyResult(
            idempotency_key=idempotency_key,
            namespace=namespace,
            is_new=is_new,
            created_at=record.created_at,
            expires_at=record.expires_at,
            processing_time_ns=elapsed_ns,
        )

    @staticmethod
    def _validate(
        idempotency_key: str, namespace: Optional[str], ttl_seconds: Optional[int]
    ) -> None:
        errors: Dict[str, str] = {}
        try:
            validate_key(idempotency_key, namespace)
        except IdempotencyValidationError as e:
            errors.update(e.errors)

        if ttl_seconds is not None and (
            isinstance(ttl_seconds, bool)
            or not isinstance(ttl_seconds, int)
            or ttl_seconds < 1
        ):
            errors["ttl_seconds"] = "TTL must be a positive integer"

        if errors:
            logger.warning("idempotency_validation_failed", errors=errors)
            raise IdempotencyValidationError(errors)

    def health_check(self) -> OperationResult:
        return self._store.health_check()

    def get_stats(self) -> Dict[str, Any]:
        return self._store.get_stats()

    @property
    def store(self) -> IdempotencyStore:
        """Access the underlying IdempotencyStore instance."""
        return self._store

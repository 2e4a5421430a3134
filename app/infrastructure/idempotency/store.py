"""Idempotency store abstract base class."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from infrastructure.idempotency.models import IdempotencyRecord
from infrastructure.operations import OperationResult


class IdempotencyStore(ABC):
    """Abstract base class for idempotency store implementations.

    Both implementations give the same guarantee: among concurrent
    check_and_insert calls for one composite key with no intervening expiry,
    exactly one observes is_new=True and every other call observes the
    winner's record.

    Stores are owned objects: construct, start(), use, close().
    """

    default_ttl_seconds: int

    def start(self) -> None:
        """Start background work owned by the store (no-op by default)."""

    def close(self) -> None:
        """Release resources owned by the store (no-op by default)."""

    @abstractmethod
    def check_and_insert(
        self,
        composite_key: str,
        ttl_seconds: Optional[int] = None,
        raw_key: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> Tuple[bool, IdempotencyRecord]:
        """Atomically claim composite_key for ttl_seconds.

        Args:
            composite_key: Key produced by the key composer.
            ttl_seconds: Claim lifetime; the store default when None. Must
                already be validated as a positive integer.
            raw_key: Caller key recorded on a new record (defaults to
                composite_key).
            namespace: Caller namespace recorded on a new record.

        Returns:
            (is_new, record). When is_new is False, record is the live claim
            that won, not one built from this call's TTL.

        Raises:
            BackendUnavailableError: Shared backend unreachable.
            BackendTimeoutError: Shared backend call timed out.
        """

    @abstractmethod
    def health_check(self) -> OperationResult:
        """Report whether the store can serve checks."""

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics (implementation-specific)."""

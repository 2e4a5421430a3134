"""Idempotency value types."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class IdempotencyRecord:
    """One claimed occurrence of a composite key.

    Records are immutable. The in-process store replaces a whole record when an
    expired one is superseded, and compares records by identity when doing so.

    Attributes:
        composite_key: Storage key (namespace + raw key)
        raw_key: Caller-supplied idempotency key
        namespace: Optional caller namespace
        created_at: When the key was claimed (UTC)
        expires_at: When the claim stops blocking reuse (UTC)
    """

    composite_key: str
    raw_key: str
    namespace: Optional[str]
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """A record is live up to and including its expiry instant."""
        return self.expires_at < now


@dataclass(frozen=True)
class IdempotencyResult:
    """Caller-facing outcome of an idempotency check.

    Attributes:
        idempotency_key: The raw key that was checked
        namespace: Namespace the key was checked in
        is_new: True if this call claimed the key
        created_at: Creation time of the live claim (the winner's when duplicate)
        expires_at: Expiry time of the live claim (the winner's when duplicate)
        processing_time_ns: Time spent composing the key and consulting the store
    """

    idempotency_key: str
    namespace: Optional[str]
    is_new: bool
    created_at: datetime
    expires_at: datetime
    processing_time_ns: int

    @property
    def is_duplicate(self) -> bool:
        return not self.is_new

"""Idempotency error taxonomy.

- IdempotencyValidationError: malformed key, namespace or TTL; rejected before
  the store is touched.
- BackendUnavailableError: the shared backend could not be reached. Retryable.
- BackendTimeoutError: the shared backend did not answer within the per-call
  timeout. Retryable.
- AmbiguousStateError: a duplicate's metadata could not be read back
  consistently. Resolved inside the shared store, never surfaced to callers.

None of these are ever converted into a "new" or "duplicate" verdict.
"""

from typing import Dict, Optional


class IdempotencyError(Exception):
    """Base class for idempotency errors."""


class IdempotencyValidationError(IdempotencyError):
    """Raised when a key, namespace or TTL is malformed.

    Attributes:
        errors: Mapping of field name to validation message
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__(
            "; ".join(f"{field}: {message}" for field, message in errors.items())
        )


class BackendUnavailableError(IdempotencyError):
    """Raised when the shared backend is unreachable or rejects the call."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.error_code = error_code
        super().__init__(message)


class BackendTimeoutError(BackendUnavailableError):
    """Raised when the shared backend does not answer in time."""


class AmbiguousStateError(IdempotencyError):
    """Raised when a duplicate key's metadata cannot be reconstructed."""

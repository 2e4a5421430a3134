"""Idempotency key builder for consistent composite key generation."""

from typing import Dict, Optional

from infrastructure.idempotency.exceptions import IdempotencyValidationError

MAX_KEY_LENGTH = 256
MAX_NAMESPACE_LENGTH = 128
NAMESPACE_SEPARATOR = ":"


def compose_key(raw_key: str, namespace: Optional[str] = None) -> str:
    """Combine an optional namespace and a raw key into one composite key.

    A missing namespace and an empty namespace both map to the unnamespaced
    key space.

    Example:
        >>> compose_key("order-1", "billing")
        'billing:order-1'
        >>> compose_key("order-1", "") == compose_key("order-1", None) == "order-1"
        True
    """
    if namespace:
        return f"{namespace}{NAMESPACE_SEPARATOR}{raw_key}"
    return raw_key


def validate_key(raw_key: Optional[str], namespace: Optional[str] = None) -> None:
    """Validate a raw key and namespace.

    Raises:
        IdempotencyValidationError: If the key is missing, blank or longer than
            256 characters, or the namespace is longer than 128 characters.
    """
    errors: Dict[str, str] = {}

    if raw_key is None or not raw_key.strip():
        errors["idempotency_key"] = "Idempotency key is required"
    elif len(raw_key) > MAX_KEY_LENGTH:
        errors["idempotency_key"] = (
            f"Idempotency key must be between 1 and {MAX_KEY_LENGTH} characters"
        )

    if namespace is not None and len(namespace) > MAX_NAMESPACE_LENGTH:
        errors["namespace"] = (
            f"Namespace must not exceed {MAX_NAMESPACE_LENGTH} characters"
        )

    if errors:
        raise IdempotencyValidationError(errors)


class IdempotencyKeyBuilder:
    """Build composite keys for one namespace.

    Example:
        >>> builder = IdempotencyKeyBuilder(namespace="payments")
        >>> builder.build("order-1")
        'payments:order-1'
    """

    def __init__(self, namespace: Optional[str] = None):
        """Initialize key builder.

        Args:
            namespace: Namespace for key isolation (e.g., "payments"). None or
                empty string builds unnamespaced keys.
        """
        self.namespace = namespace

    def build(self, raw_key: str) -> str:
        """Validate and compose the composite key for raw_key.

        Raises:
            IdempotencyValidationError: If raw_key or the namespace is malformed.
        """
        validate_key(raw_key, self.namespace)
        return compose_key(raw_key, self.namespace)

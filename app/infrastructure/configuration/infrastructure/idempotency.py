"""Idempotency infrastructure settings."""

from typing import Literal

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class IdempotencySettings(InfrastructureSettings):
    """Idempotency store configuration for deduplicating retried operations.

    Environment Variables:
        IDEMPOTENCY_BACKEND: Store backend - 'in-process' or 'shared' (default: in-process)
        IDEMPOTENCY_TTL_SECONDS: Default time-to-live for claimed keys (default: 3600s = 1h)
        IDEMPOTENCY_SWEEP_INTERVAL_SECONDS: Interval between expiry sweeps of the
            in-process store (default: 60s)
        IDEMPOTENCY_KEY_PREFIX: Prefix applied to every key written to the shared
            backend (default: "idempotency:")

    Backends:
        - in-process: Process-local concurrent map (single instance deployments)
        - shared: Redis-backed store shared by every instance

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        ttl = settings.idempotency.IDEMPOTENCY_TTL_SECONDS
        if settings.idempotency.IDEMPOTENCY_BACKEND == "shared":
            # Connect to Redis...
        ```
    """

    IDEMPOTENCY_BACKEND: Literal["in-process", "shared"] = Field(
        default="in-process", alias="IDEMPOTENCY_BACKEND"
    )
    IDEMPOTENCY_TTL_SECONDS: int = Field(
        default=3600, gt=0, alias="IDEMPOTENCY_TTL_SECONDS"
    )
    IDEMPOTENCY_SWEEP_INTERVAL_SECONDS: int = Field(
        default=60, gt=0, alias="IDEMPOTENCY_SWEEP_INTERVAL_SECONDS"
    )
    IDEMPOTENCY_KEY_PREFIX: str = Field(
        default="idempotency:", alias="IDEMPOTENCY_KEY_PREFIX"
    )

"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the idempotency
service using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    IdempotencySettings: Store settings class (for testing)
    RedisSettings: Shared backend settings class (for testing)
    ServerSettings: Server settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    backend = settings.idempotency.IDEMPOTENCY_BACKEND
    redis_port = settings.redis.REDIS_PORT
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure import (
    IdempotencySettings,
    RedisSettings,
    ServerSettings,
)

__all__ = ["Settings", "IdempotencySettings", "RedisSettings", "ServerSettings"]

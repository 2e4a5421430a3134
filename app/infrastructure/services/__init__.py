"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    IdempotencyServiceDep,
    ApiKeyProviderDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_idempotency_service,
    get_api_key_provider,
)

__all__ = [
    "SettingsDep",
    "IdempotencyServiceDep",
    "ApiKeyProviderDep",
    "get_settings",
    "get_idempotency_service",
    "get_api_key_provider",
]

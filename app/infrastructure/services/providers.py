"""
Factory functions for dependency injection.

Provides application-scoped providers for core infrastructure services.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Request

from infrastructure.configuration import Settings

if TYPE_CHECKING:
    from infrastructure.idempotency.service import IdempotencyService
    from infrastructure.security.api_keys import ApiKeyProvider


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


def get_idempotency_service(request: Request) -> "IdempotencyService":
    """
    Get the idempotency service owned by the running application.

    The service (and the store it wraps) is constructed in the application
    lifespan and attached to `app.state`; this provider only hands it out.

    Returns:
        IdempotencyService: The application's idempotency service.
    """
    return request.app.state.idempotency_service


def get_api_key_provider(request: Request) -> "ApiKeyProvider":
    """
    Get the API key provider loaded at application startup.

    Returns:
        ApiKeyProvider: The application's API key provider.
    """
    return request.app.state.api_key_provider

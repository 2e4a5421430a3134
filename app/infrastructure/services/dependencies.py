"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated

from fastapi import Depends

from infrastructure.configuration import Settings
from infrastructure.idempotency.service import IdempotencyService
from infrastructure.security.api_keys import ApiKeyProvider
from infrastructure.services.providers import (
    get_api_key_provider,
    get_idempotency_service,
    get_settings,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Idempotency service dependency (store selected by IDEMPOTENCY_BACKEND)
IdempotencyServiceDep = Annotated[
    IdempotencyService, Depends(get_idempotency_service)
]

# API key provider dependency
ApiKeyProviderDep = Annotated[ApiKeyProvider, Depends(get_api_key_provider)]

__all__ = [
    "SettingsDep",
    "IdempotencyServiceDep",
    "ApiKeyProviderDep",
]

"""Infrastructure modules for the idempotency service.

Centralized infrastructure components:
- configuration: Settings management (Settings, IdempotencySettings, RedisSettings)
- idempotency: Key claiming with in-process and shared (Redis) stores
- logging: Structured logging (get_module_logger, bind_request_context)
- operations: Operation results and error classification
- security: API key validation (ApiKeyProvider)
- services: Dependency injection services (SettingsDep, IdempotencyServiceDep, get_settings)
"""

# Configuration
from infrastructure.configuration import Settings

# Observability
from infrastructure.logging import get_module_logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Configuration
    "Settings",
    # Observability
    "get_module_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
]

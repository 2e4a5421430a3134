"""Redis connection settings for the shared idempotency backend."""

from typing import Optional

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class RedisSettings(InfrastructureSettings):
    """Redis connection configuration.

    Only used when IDEMPOTENCY_BACKEND is 'shared'.

    Environment Variables:
        REDIS_HOST: Redis host name (default: localhost)
        REDIS_PORT: Redis port (default: 6379)
        REDIS_DB: Redis logical database (default: 0)
        REDIS_PASSWORD: Optional password
        REDIS_TIMEOUT_SECONDS: Per-call socket timeout (default: 2.0s)
        REDIS_MAX_CONNECTIONS: Connection pool size (default: 10)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        host = settings.redis.REDIS_HOST
        port = settings.redis.REDIS_PORT
        ```
    """

    REDIS_HOST: str = Field(default="localhost", alias="REDIS_HOST")
    REDIS_PORT: int = Field(default=6379, alias="REDIS_PORT")
    REDIS_DB: int = Field(default=0, alias="REDIS_DB")
    REDIS_PASSWORD: Optional[str] = Field(default=None, alias="REDIS_PASSWORD")
    REDIS_TIMEOUT_SECONDS: float = Field(
        default=2.0, gt=0, alias="REDIS_TIMEOUT_SECONDS"
    )
    REDIS_MAX_CONNECTIONS: int = Field(default=10, gt=0, alias="REDIS_MAX_CONNECTIONS")

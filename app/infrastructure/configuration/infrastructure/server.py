"""Server infrastructure settings."""

from typing import Optional

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """Server and application runtime configuration.

    Environment Variables:
        SERVICE_NAME: Name reported by health endpoints (default: idempotency-service)
        API_KEY: API key expected in the `api-key` request header
        API_KEY_FILE: Path to a JSON file of the form {"apiKey": "..."}; used when
            API_KEY is not set

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        service_name = settings.server.SERVICE_NAME
        ```
    """

    SERVICE_NAME: str = Field(default="idempotency-service", alias="SERVICE_NAME")
    API_KEY: Optional[str] = Field(default=None, alias="API_KEY")
    API_KEY_FILE: Optional[str] = Field(default=None, alias="API_KEY_FILE")

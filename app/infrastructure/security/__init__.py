"""Infrastructure security and authentication services.

Exports:
    ApiKeyProvider: Validates the API key sent in the `api-key` header
"""

from infrastructure.security.api_keys import ApiKeyProvider

__all__ = ["ApiKeyProvider"]

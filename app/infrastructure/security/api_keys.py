"""API key provider.

Holds the single API key clients must send in the `api-key` header. The key is
read from the API_KEY setting or, when that is unset, from a JSON file of the
form {"apiKey": "..."} named by API_KEY_FILE.
"""

import hmac
import json
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from infrastructure.logging import get_module_logger

if TYPE_CHECKING:
    from infrastructure.configuration import ServerSettings

logger = get_module_logger()


class ApiKeyProvider:
    """Validate API keys presented by clients.

    A provider without a configured key rejects every request.
    """

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key or None

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    @classmethod
    def from_file(cls, path: str) -> "ApiKeyProvider":
        """Load the key from a JSON file.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not valid JSON or has no apiKey string.
        """
        try:
            content = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("api_key_file_load_failed", path=path, error=str(e))
            raise

        api_key = content.get("apiKey") if isinstance(content, dict) else None
        if not isinstance(api_key, str) or not api_key:
            logger.error("api_key_file_invalid", path=path)
            raise ValueError(f"{path} does not contain a non-empty 'apiKey' string")

        logger.info("api_key_loaded", source="file", path=path)
        return cls(api_key)

    @classmethod
    def from_settings(cls, server_settings: "ServerSettings") -> "ApiKeyProvider":
        if server_settings.API_KEY:
            logger.info("api_key_loaded", source="environment")
            return cls(server_settings.API_KEY)
        if server_settings.API_KEY_FILE:
            return cls.from_file(server_settings.API_KEY_FILE)
        logger.warning("api_key_not_configured", effect="all_requests_rejected")
        return cls(None)

    def is_valid(self, candidate: Optional[str]) -> bool:
        if self._api_key is None or not candidate:
            return False
        return hmac.compare_digest(candidate.encode(), self._api_key.encode())

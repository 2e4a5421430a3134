from typing import Optional

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from infrastructure.logging import get_module_logger
from infrastructure.services import ApiKeyProviderDep

logger = get_module_logger()

API_KEY_HEADER = "api-key"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def require_api_key(
    provider: ApiKeyProviderDep,
    api_key: Optional[str] = Security(api_key_header),
) -> None:
    """Reject the request with 401 unless a valid `api-key` header is present."""
    if not provider.is_valid(api_key):
        logger.warning("api_key_rejected", header_present=bool(api_key))
        raise HTTPException(status_code=401, detail="Invalid or missing API key")

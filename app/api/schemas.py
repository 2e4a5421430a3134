"""Request and response schemas for the idempotency API."""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, StrictInt, field_validator

from infrastructure.idempotency.key_builder import MAX_KEY_LENGTH, MAX_NAMESPACE_LENGTH
from infrastructure.idempotency.models import IdempotencyResult


class IdempotencyCheckRequest(BaseModel):
    """Body of POST /idempotency/check.

    camelCase names (idempotencyKey, clientId, ttlSeconds) are accepted for
    existing clients.
    """

    idempotency_key: str = Field(
        ...,
        min_length=1,
        max_length=MAX_KEY_LENGTH,
        validation_alias=AliasChoices("idempotency_key", "idempotencyKey"),
    )
    namespace: Optional[str] = Field(
        default=None,
        max_length=MAX_NAMESPACE_LENGTH,
        validation_alias=AliasChoices("namespace", "clientId"),
    )
    ttl_seconds: Optional[StrictInt] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("ttl_seconds", "ttlSeconds"),
    )

    @field_validator("idempotency_key")
    @classmethod
    def key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Idempotency key is required")
        return value


class IdempotencyCheckResponse(BaseModel):
    idempotency_key: str
    namespace: Optional[str] = None
    is_new: bool
    is_duplicate: bool
    created_at: datetime
    expires_at: datetime
    processing_time_ns: int

    @classmethod
    def from_result(cls, result: IdempotencyResult) -> "IdempotencyCheckResponse":
        return cls(
            idempotency_key=result.idempotency_key,
            namespace=result.namespace,
            is_new=result.is_new,
            is_duplicate=result.is_duplicate,
            created_at=result.created_at,
            expires_at=result.expires_at,
            processing_time_ns=result.processing_time_ns,
        )


class HealthResponse(BaseModel):
    status: str
    service: str
    backend: str
    timestamp: datetime
    message: str

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from api.dependencies.auth import require_api_key
from api.schemas import HealthResponse, IdempotencyCheckRequest, IdempotencyCheckResponse
from infrastructure.logging import get_module_logger
from infrastructure.services import IdempotencyServiceDep, SettingsDep

logger = get_module_logger()
router = APIRouter(prefix="/idempotency", tags=["Idempotency"])


@router.post(
    "/check",
    response_model=IdempotencyCheckResponse,
    dependencies=[Depends(require_api_key)],
    responses={
        409: {"model": IdempotencyCheckResponse, "description": "Duplicate key"},
        401: {"description": "Invalid or missing API key"},
        503: {"description": "Idempotency backend unavailable"},
        504: {"description": "Idempotency backend timed out"},
    },
)
def check_idempotency(
    payload: IdempotencyCheckRequest,
    idempotency: IdempotencyServiceDep,
    response: Response,
):
    """Atomically check and claim an idempotency key.

    Returns 200 with is_new=true when this call claimed the key (proceed with
    the operation) and 409 with is_duplicate=true when the key is already
    claimed (skip it).
    """
    logger.debug("idempotency_check_requested", key=payload.idempotency_key)
    result = idempotency.check(
        payload.idempotency_key,
        namespace=payload.namespace,
        ttl_seconds=payload.ttl_seconds,
    )
    if result.is_duplicate:
        response.status_code = 409
    return IdempotencyCheckResponse.from_result(result)


@router.get("/health", response_model=HealthResponse)
def health(idempotency: IdempotencyServiceDep, settings: SettingsDep):
    """Report service health, including the store backend."""
    check = idempotency.health_check()
    body = HealthResponse(
        status="UP" if check.is_success else "DOWN",
        service=settings.server.SERVICE_NAME,
        backend=settings.idempotency.IDEMPOTENCY_BACKEND,
        timestamp=datetime.now(timezone.utc),
        message=(
            "Service is healthy and operational" if check.is_success else check.message
        ),
    )
    if not check.is_success:
        return JSONResponse(status_code=503, content=body.model_dump(mode="json"))
    return body


@router.get("/ping", response_class=PlainTextResponse)
def ping():
    return "pong"

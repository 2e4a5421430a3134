"""Exception handlers mapping idempotency errors onto HTTP responses.

- IdempotencyValidationError / request validation: 400
- BackendTimeoutError: 504
- BackendUnavailableError: 503
- anything else: 500, affecting only the failing request
"""

from typing import Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from infrastructure.idempotency.exceptions import (
    BackendTimeoutError,
    BackendUnavailableError,
    IdempotencyValidationError,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def _validation_response(errors: Dict[str, str]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Validation Failed", "errors": errors},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: Dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = location[-1] if location else "body"
        errors[field] = error.get("msg", "Invalid value")
    logger.warning("request_validation_failed", path=request.url.path, errors=errors)
    return _validation_response(errors)


async def idempotency_validation_handler(
    request: Request, exc: IdempotencyValidationError
) -> JSONResponse:
    logger.warning("idempotency_validation_failed", path=request.url.path, errors=exc.errors)
    return _validation_response(exc.errors)


async def backend_unavailable_handler(
    request: Request, exc: BackendUnavailableError
) -> JSONResponse:
    timed_out = isinstance(exc, BackendTimeoutError)
    logger.error(
        "idempotency_backend_request_failed",
        path=request.url.path,
        timed_out=timed_out,
        error=str(exc),
        error_code=exc.error_code,
    )
    return JSONResponse(
        status_code=504 if timed_out else 503,
        content={
            "message": (
                "Idempotency backend timed out"
                if timed_out
                else "Idempotency backend unavailable"
            ),
            "retryable": True,
        },
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unexpected_request_error",
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IdempotencyValidationError, idempotency_validation_handler)
    app.add_exception_handler(BackendUnavailableError, backend_unavailable_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

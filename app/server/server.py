from typing import Optional

from fastapi import FastAPI, Request

from api.dependencies.rate_limits import setup_rate_limiter
from api.errors import register_exception_handlers
from api.router import api_router
from infrastructure.configuration import Settings
from infrastructure.logging import bind_request_context
from infrastructure.services.providers import get_settings
from server.lifespan import lifespan

CORRELATION_ID_HEADER = "X-Correlation-ID"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the idempotency service application.

    The store is created when the lifespan starts and closed when it ends, so
    the returned app holds no store until it is served (or entered through a
    TestClient context).

    Args:
        settings: Settings to run with; loaded from the environment when omitted.
    """
    settings = settings or get_settings()

    app = FastAPI(title=settings.server.SERVICE_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    setup_rate_limiter(app)
    register_exception_handlers(app)

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_ID_HEADER),
            request_path=request.url.path,
            request_method=request.method,
        ) as correlation_id:
            response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response

    app.include_router(api_router)
    return app

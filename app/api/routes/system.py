from fastapi import APIRouter, Request

from api.dependencies.rate_limits import HEALTH_CHECK_LIMIT, get_limiter
from infrastructure.services import SettingsDep

router = APIRouter(tags=["System"])
limiter = get_limiter()


# Load balancers poll these endpoints, so they get a generous rate limit.
@router.get("/version")
@limiter.limit(HEALTH_CHECK_LIMIT)
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit(HEALTH_CHECK_LIMIT)
def get_health(request: Request):  # pylint: disable=unused-argument
    """Healthcheck endpoint."""
    return {"status": "ok"}

from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.idempotency import IdempotencyService, IdempotencyStore, create_store
from infrastructure.logging.setup import configure_logging
from infrastructure.security import ApiKeyProvider

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _start_store(settings: "Settings", logger: BoundLogger) -> IdempotencyStore:
    store = create_store(settings)
    store.start()
    logger.info(
        "idempotency_store_started",
        backend=settings.idempotency.IDEMPOTENCY_BACKEND,
    )
    return store


def _stop_store(store: IdempotencyStore, logger: BoundLogger) -> None:
    try:
        store.close()
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("idempotency_store_close_failed", error=str(exc))
        return
    logger.info("idempotency_store_stopped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: "Settings" = app.state.settings
    logger = configure_logging(settings=settings)

    logger.info("application_startup")
    _list_configs(settings, logger)

    app.state.api_key_provider = ApiKeyProvider.from_settings(settings.server)

    store = _start_store(settings, logger)
    app.state.idempotency_service = IdempotencyService(store)

    yield

    logger.info("application_shutdown")
    _stop_store(store, logger)

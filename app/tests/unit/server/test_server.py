"""Unit tests for the application factory."""

import pytest
from fastapi.testclient import TestClient

from infrastructure.idempotency import IdempotencyService, InMemoryIdempotencyStore
from infrastructure.services.providers import get_settings
from server.server import CORRELATION_ID_HEADER, create_app

pytestmark = pytest.mark.unit


class TestCreateApp:
    def test_uses_given_settings(self, settings):
        app = create_app(settings)

        assert app.state.settings is settings
        assert app.dependency_overrides[get_settings]() is settings
        assert app.title == "idempotency-service"

    def test_registers_routes(self, settings):
        paths = {route.path for route in create_app(settings).routes}

        assert {
            "/health",
            "/version",
            "/idempotency/check",
            "/idempotency/health",
            "/idempotency/ping",
        } <= paths

    def test_no_store_before_lifespan(self, settings):
        app = create_app(settings)

        assert not hasattr(app.state, "idempotency_service")

    def test_lifespan_attaches_service(self, settings):
        app = create_app(settings)

        with TestClient(app):
            service = app.state.idempotency_service
            assert isinstance(service, IdempotencyService)
            assert isinstance(service.store, InMemoryIdempotencyStore)
            assert service.get_stats()["sweeper_running"] is True

        assert service.get_stats()["sweeper_running"] is False


class TestCorrelationIdMiddleware:
    def test_echoes_provided_correlation_id(self, settings):
        with TestClient(create_app(settings)) as client:
            response = client.get(
                "/idempotency/ping", headers={CORRELATION_ID_HEADER: "req-123"}
            )

        assert response.headers[CORRELATION_ID_HEADER] == "req-123"

    def test_generates_correlation_id(self, settings):
        with TestClient(create_app(settings)) as client:
            first = client.get("/idempotency/ping")
            second = client.get("/idempotency/ping")

        assert first.headers[CORRELATION_ID_HEADER]
        assert first.headers[CORRELATION_ID_HEADER] != second.headers[CORRELATION_ID_HEADER]

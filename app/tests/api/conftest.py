"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import get_limiter
from server.server import create_app

API_KEY_HEADERS = {"api-key": "test-api-key"}


@pytest.fixture(autouse=True)
def reset_rate_limits():
    get_limiter().reset()
    yield
    get_limiter().reset()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """TestClient with the lifespan running, so the store is started."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return dict(API_KEY_HEADERS)

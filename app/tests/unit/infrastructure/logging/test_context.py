"""Unit tests for infrastructure.logging.context module.

Tests cover:
- bind_request_context() context manager
- get_correlation_id()
- clear_request_context()
- Context cleanup
"""

import uuid

import pytest
import structlog

from infrastructure.logging.context import (
    bind_request_context,
    clear_request_context,
    get_correlation_id,
)


@pytest.fixture(autouse=True)
def _clean_context():
    clear_request_context()
    yield
    clear_request_context()


@pytest.mark.unit
class TestBindRequestContext:
    """Test suite for bind_request_context context manager."""

    def test_auto_generates_correlation_id(self):
        with bind_request_context() as correlation_id:
            assert get_correlation_id() == correlation_id
            uuid.UUID(correlation_id)

    def test_uses_provided_correlation_id(self):
        with bind_request_context(correlation_id="req-123") as correlation_id:
            assert correlation_id == "req-123"
            assert get_correlation_id() == "req-123"

    def test_binds_request_path_and_method(self):
        with bind_request_context(request_path="/idempotency/check", request_method="POST"):
            context = structlog.contextvars.get_contextvars()
            assert context["request_path"] == "/idempotency/check"
            assert context["request_method"] == "POST"

    def test_omits_unset_fields(self):
        with bind_request_context():
            context = structlog.contextvars.get_contextvars()
            assert "request_path" not in context
            assert "request_method" not in context

    def test_binds_extra_context(self):
        with bind_request_context(namespace="billing"):
            assert structlog.contextvars.get_contextvars()["namespace"] == "billing"

    def test_unbinds_on_exit(self):
        with bind_request_context(correlation_id="req-123", request_path="/x"):
            pass

        assert get_correlation_id() is None
        assert "request_path" not in structlog.contextvars.get_contextvars()

    def test_unbinds_on_exception(self):
        with pytest.raises(RuntimeError):
            with bind_request_context(correlation_id="req-123"):
                raise RuntimeError("boom")

        assert get_correlation_id() is None


@pytest.mark.unit
class TestClearRequestContext:
    def test_clears_everything(self):
        structlog.contextvars.bind_contextvars(correlation_id="req-1", other="x")

        clear_request_context()

        assert structlog.contextvars.get_contextvars() == {}

    def test_get_correlation_id_none_when_unbound(self):
        assert get_correlation_id() is None

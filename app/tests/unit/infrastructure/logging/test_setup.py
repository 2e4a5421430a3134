"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_module_logger function
- Test logging suppression in test environment
"""

import logging

import pytest
import structlog

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
    _is_test_environment,
)


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_configure_logging_returns_bound_logger(self, mock_settings):
        """configure_logging returns a logger exposing the level methods."""
        result = configure_logging(settings=mock_settings)

        for method in ("debug", "info", "warning", "error"):
            assert hasattr(result, method)

    @pytest.mark.parametrize("log_level", ["DEBUG", "INFO", "WARNING"])
    def test_configure_logging_accepts_log_level(self, mock_settings, log_level):
        assert configure_logging(settings=mock_settings, log_level=log_level) is not None

    @pytest.mark.parametrize("is_production", [True, False])
    def test_configure_logging_accepts_is_production(self, mock_settings, is_production):
        assert (
            configure_logging(settings=mock_settings, is_production=is_production)
            is not None
        )

    def test_configure_logging_suppresses_output_under_pytest(self, mock_settings):
        """Root logger level is raised above CRITICAL during tests."""
        configure_logging(settings=mock_settings)

        assert logging.root.level > logging.CRITICAL

    def test_configure_logging_idempotent(self, mock_settings):
        """Multiple configure_logging calls are safe."""
        configure_logging(settings=mock_settings)
        configure_logging(settings=mock_settings)

        assert logging.root.level > logging.CRITICAL


@pytest.mark.unit
class TestGetModuleLogger:
    """Test suite for get_module_logger function."""

    def test_binds_calling_module(self):
        """Logger carries the caller's module as component."""
        module_logger = get_module_logger()

        context = structlog.get_context(module_logger)
        assert context["component"] == "test_setup"
        assert context["module_path"].endswith("test_setup")

    def test_logging_calls_do_not_raise(self):
        module_logger = get_module_logger()
        module_logger.info("idempotency_check_completed", key="order-1")

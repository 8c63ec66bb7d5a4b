"""Unit tests for structured logging configuration.

Tests the structlog configuration, its output format, and the
service logging mixin.
"""

import json
import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest
import structlog
from structlog.testing import capture_logs

from stakevote.application.observability.correlation import set_correlation_id
from stakevote.application.services.base import LoggingMixin
from stakevote.infrastructure import observability
from stakevote.infrastructure.observability.logging import configure_structlog


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()
    set_correlation_id("")


class TestConfigureStructlog:
    """Tests for configure_structlog function."""

    def test_production_renders_json(self) -> None:
        configure_structlog(environment="production")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_structlog(environment="development")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_defaults_to_production(self) -> None:
        configure_structlog()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)


class TestLogOutput:
    """Tests for actual log output format."""

    def test_json_output_structure(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Log lines are JSON with level, timestamp and correlation id."""
        configure_structlog(environment="production")
        set_correlation_id("test-json-output")

        structlog.get_logger().info("Vote cast", round_id=1)

        log_entry = json.loads(capsys.readouterr().out.strip())
        assert log_entry["event"] == "Vote cast"
        assert log_entry["level"] == "info"
        assert "T" in log_entry["timestamp"]
        assert log_entry["correlation_id"] == "test-json-output"
        assert log_entry["round_id"] == 1

    def test_no_correlation_id_when_unset(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_structlog(environment="production")
        set_correlation_id("")

        structlog.get_logger().info("Round opened")

        log_entry = json.loads(capsys.readouterr().out.strip())
        assert "correlation_id" not in log_entry

    def test_level_from_environment(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}):
            configure_structlog(environment="production")

        structlog.get_logger().info("dropped")
        structlog.get_logger().warning("kept")

        lines = capsys.readouterr().out.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["kept"]


class TestServiceLoggers:
    """Tests for service logger binding."""

    def test_package_exposes_configuration_only(self) -> None:
        assert observability.__all__ == ["configure_structlog"]
        assert not hasattr(observability, "get_logger_for_service")

    def test_logging_mixin_binds_operation(self) -> None:
        class Sample(LoggingMixin):
            def __init__(self) -> None:
                self._init_logger(component="custody")

        set_correlation_id("op-1")
        with capture_logs() as logs:
            Sample()._log_operation("lock", voter_id="alice").info("moved")

        assert logs[0]["service"] == "Sample"
        assert logs[0]["component"] == "custody"
        assert logs[0]["operation"] == "lock"
        assert logs[0]["correlation_id"] == "op-1"
        assert logs[0]["voter_id"] == "alice"

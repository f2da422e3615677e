"""Unit tests for Loguru configuration and formatters."""

import json
import logging
import sys
from collections.abc import Generator
from typing import Any

import pytest
from loguru import logger
from pytest_mock import MockerFixture

from src.core.config import LogConfig, Settings
from src.core.constants import REDACTED
from src.core.logging import (
    CORRELATION_ID_DISPLAY_LENGTH,
    LOG_FORMATTERS,
    MAX_FIELD_VALUE_LENGTH,
    InterceptHandler,
    _format_context_fields,
    _state,
    format_console_with_context,
    serialize_for_json,
    setup_logging,
)


class MockLevel:
    name = "INFO"


class MockTime:
    def isoformat(self) -> str:
        return "2024-01-01T12:00:00+00:00"


@pytest.fixture
def mock_record() -> dict[str, Any]:
    """Create a minimal Loguru record."""
    return {
        "time": MockTime(),
        "level": MockLevel(),
        "message": "Request completed",
        "name": "src.api.middleware.request_logging",
        "function": "dispatch",
        "line": 42,
        "exception": None,
        "extra": {
            "correlation_id": "0123456789abcdef",
            "client_ip": "203.0.113.7",
            "status_code": 200,
            "duration_ms": 12.5,
            "password": "hunter2",
            "_internal": "hidden",
        },
    }


@pytest.fixture
def reset_logging_state() -> Generator[None]:
    """Allow setup_logging to run again and restore the default sink."""
    _state.configured = False
    yield
    _state.configured = False
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
class TestJsonFormatter:
    """Test the JSON formatter."""

    def test_json_fields(self, mock_record: dict[str, Any]) -> None:
        """Test the base fields and public extras are serialized."""
        data = json.loads(serialize_for_json(mock_record))

        assert data["timestamp"] == "2024-01-01T12:00:00+00:00"
        assert data["level"] == "INFO"
        assert data["message"] == "Request completed"
        assert data["function"] == "dispatch"
        assert data["line"] == 42
        assert data["correlation_id"] == "0123456789abcdef"
        assert data["client_ip"] == "203.0.113.7"
        assert "_internal" not in data

    def test_sensitive_extras_are_redacted(self, mock_record: dict[str, Any]) -> None:
        """Test sensitive context never reaches the output."""
        data = json.loads(serialize_for_json(mock_record))

        assert data["password"] == REDACTED

    def test_one_line_per_record(self, mock_record: dict[str, Any]) -> None:
        """Test every record ends with exactly one newline."""
        output = serialize_for_json(mock_record)

        assert output.endswith("\n")
        assert output.count("\n") == 1

    def test_registered(self) -> None:
        """Test the json formatter is available by name."""
        assert LOG_FORMATTERS["json"] is serialize_for_json


@pytest.mark.unit
class TestConsoleFormatter:
    """Test the console formatter."""

    def test_priority_fields_first(self, mock_record: dict[str, Any]) -> None:
        """Test priority fields are shown before other context."""
        parts = _format_context_fields(mock_record["extra"])

        assert parts[0] == (
            f"<yellow>{'0123456789abcdef'[:CORRELATION_ID_DISPLAY_LENGTH]}</yellow>"
        )
        assert parts[1] == "<yellow>203.0.113.7</yellow>"
        assert "<yellow>12.5ms</yellow>" in parts
        assert f"<dim>password={REDACTED}</dim>" in parts
        assert not any("_internal" in part for part in parts)

    def test_long_values_are_truncated(self) -> None:
        """Test extra values are cut at the maximum length."""
        parts = _format_context_fields({"payload": "x" * 500})

        assert parts == [
            f"<dim>payload={'x' * (MAX_FIELD_VALUE_LENGTH - 3)}...</dim>"
        ]

    def test_braces_are_escaped(self) -> None:
        """Test values cannot inject format placeholders."""
        parts = _format_context_fields({"body": "{message}"})

        assert parts == ["<dim>body={{message}}</dim>"]

    def test_format_includes_message_and_context(
        self, mock_record: dict[str, Any]
    ) -> None:
        """Test the format string holds context and message."""
        line = format_console_with_context(mock_record)

        assert "Request completed" in line
        assert "[<yellow>01234567</yellow>]" in line
        assert line.endswith("\n")
        assert "{exception}" not in line

    def test_format_with_exception(self, mock_record: dict[str, Any]) -> None:
        """Test exceptions are appended when present."""
        mock_record["exception"] = object()

        assert format_console_with_context(mock_record).endswith("{exception}")


@pytest.mark.unit
@pytest.mark.usefixtures("reset_logging_state")
class TestSetupLogging:
    """Test sink configuration."""

    def test_configures_once(self, mocker: MockerFixture) -> None:
        """Test repeated calls keep the first configuration."""
        add = mocker.spy(logger, "add")
        settings = Settings(log_config=LogConfig(log_formatter_type="json"))

        setup_logging(settings)
        setup_logging(settings)

        assert add.call_count == 1
        assert _state.configured is True

    def test_console_sink(self, mocker: MockerFixture) -> None:
        """Test the console formatter writes to stdout with colors."""
        add = mocker.patch.object(logger, "add")
        settings = Settings(log_config=LogConfig(log_formatter_type="console"))

        setup_logging(settings)

        kwargs = add.call_args.kwargs
        assert kwargs["format"] is format_console_with_context
        assert kwargs["colorize"] is True
        assert kwargs["level"] == "INFO"

    def test_json_sink(self, mocker: MockerFixture) -> None:
        """Test the json formatter never logs variable values."""
        add = mocker.patch.object(logger, "add")
        settings = Settings(
            log_config=LogConfig(log_formatter_type="json", log_level="WARNING")
        )

        setup_logging(settings)

        kwargs = add.call_args.kwargs
        assert kwargs["diagnose"] is False
        assert kwargs["level"] == "WARNING"

    def test_uvicorn_is_intercepted(self) -> None:
        """Test uvicorn loggers are routed through Loguru."""
        setup_logging(Settings(log_config=LogConfig(log_formatter_type="json")))

        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            std_logger = logging.getLogger(name)
            assert isinstance(std_logger.handlers[0], InterceptHandler)
            assert std_logger.propagate is False

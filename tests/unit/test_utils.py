"""Unit tests for logging setup and error rendering."""

import json

import pytest
import structlog

from toolgate.errors import InvalidPayloadError, ToolgateError, UnknownToolError
from toolgate.utils import setup_logging


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestSetupLogging:
    """Test setup_logging."""

    def test_json_output(self, reset_structlog, capsys):
        """Test JSON lines are written to stderr."""
        logger = setup_logging("INFO", "json")

        logger.info("Action proposed", action_id="abc234")

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "Action proposed"
        assert record["action_id"] == "abc234"
        assert record["level"] == "info"

    def test_level_filtering(self, reset_structlog, capsys):
        """Test records below the configured level are dropped."""
        logger = setup_logging("WARNING", "json")

        logger.info("hidden")
        logger.warning("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_unknown_level_defaults_to_info(self, reset_structlog, capsys):
        """Test an unknown level name falls back to INFO."""
        logger = setup_logging("LOUD", "console")

        logger.debug("hidden")
        logger.info("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err


class TestErrors:
    """Test error types."""

    def test_to_text(self):
        """Test errors render as outcome text."""
        assert ToolgateError("broken").to_text() == "Error: broken"

    def test_to_text_with_hint(self):
        """Test hints are appended on their own line."""
        error = InvalidPayloadError("Command must be a non-empty string", action_hint="Pass a command.")

        assert error.to_text() == "Error: Command must be a non-empty string\nHint: Pass a command."

    def test_codes(self):
        """Test each error type carries its code."""
        assert InvalidPayloadError("x").code == "invalid_payload"
        assert UnknownToolError("x").code == "unknown_tool"
        assert isinstance(UnknownToolError("x"), ToolgateError)

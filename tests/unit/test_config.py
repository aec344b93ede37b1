"""Unit tests for configuration settings."""

import os

import pytest
from pydantic import ValidationError

from toolgate.config import GateSettings


class TestGateSettings:
    """Test GateSettings model."""

    def test_default_settings(self, monkeypatch):
        """Test default settings."""
        for key in list(os.environ):
            if key.upper().startswith("TOOLGATE_"):
                monkeypatch.delenv(key)

        settings = GateSettings()

        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.host == "127.0.0.1"
        assert settings.port == 8765
        assert settings.metrics_enabled is False
        assert settings.shell_timeout_seconds == 60
        assert settings.shell_executable is None
        assert settings.action_id_length == 8
        assert settings.file_encoding == "utf-8"

    def test_custom_settings(self):
        """Test custom settings."""
        settings = GateSettings(
            log_level="DEBUG",
            log_format="console",
            port=9000,
            shell_timeout_seconds=2.5,
            shell_executable="/bin/bash",
        )

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "console"
        assert settings.port == 9000
        assert settings.shell_timeout_seconds == 2.5
        assert settings.shell_executable == "/bin/bash"

    def test_environment_overrides(self, monkeypatch):
        """Test settings are read from TOOLGATE_ environment variables."""
        monkeypatch.setenv("TOOLGATE_SHELL_TIMEOUT_SECONDS", "12")
        monkeypatch.setenv("toolgate_port", "9100")

        settings = GateSettings()

        assert settings.shell_timeout_seconds == 12
        assert settings.port == 9100

    def test_port_validation(self):
        """Test port number validation."""
        with pytest.raises(ValidationError):
            GateSettings(port=80)

        with pytest.raises(ValidationError):
            GateSettings(metrics_port=70000)

    def test_timeout_validation(self):
        """Test shell timeout validation."""
        with pytest.raises(ValidationError):
            GateSettings(shell_timeout_seconds=0)

        with pytest.raises(ValidationError):
            GateSettings(shell_timeout_seconds=7200)

    def test_action_id_length_validation(self):
        """Test action id length stays short enough to retype."""
        assert GateSettings(action_id_length=6).action_id_length == 6

        with pytest.raises(ValidationError):
            GateSettings(action_id_length=4)

        with pytest.raises(ValidationError):
            GateSettings(action_id_length=32)

    def test_log_format_validation(self):
        """Test only known log formats are accepted."""
        with pytest.raises(ValidationError):
            GateSettings(log_format="xml")

    def test_validate_assignment(self):
        """Test assignments are validated."""
        settings = GateSettings()

        with pytest.raises(ValidationError):
            settings.port = 1

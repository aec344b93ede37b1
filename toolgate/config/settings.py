"""Configuration models using Pydantic."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GateSettings(BaseSettings):
    """Global server configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLGATE_",
        case_sensitive=False,
        validate_assignment=True,
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        pattern="^(json|console)$",
        description="Log format (json, console)"
    )

    # HTTP server configuration
    host: str = Field(
        default="127.0.0.1",
        description="Interface the tool server binds to"
    )
    port: int = Field(
        default=8765,
        ge=1024,
        le=65535,
        description="Port for the tool server"
    )

    # Metrics configuration
    metrics_enabled: bool = Field(
        default=False,
        description="Start a standalone Prometheus metrics server"
    )
    metrics_port: int = Field(
        default=9095,
        ge=1024,
        le=65535,
        description="Port for Prometheus metrics server"
    )

    # Shell execution configuration
    shell_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=3600,
        description="Maximum run time of an approved shell command"
    )
    shell_executable: Optional[str] = Field(
        default=None,
        description="Shell used for commands (None for the host default)"
    )
    max_output_chars: int = Field(
        default=20000,
        ge=100,
        description="Captured stdout/stderr is truncated to this many characters"
    )

    # Action registry configuration
    action_id_length: int = Field(
        default=8,
        ge=6,
        le=10,
        description="Length of generated action identifiers"
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Encoding used for file writes and reads"
    )

"""Configuration management with Pydantic models."""

from .settings import GateSettings

__all__ = ["GateSettings"]

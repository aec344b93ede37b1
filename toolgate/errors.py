"""Exception types raised at the tool boundary."""

from typing import Any


class ToolgateError(Exception):
    """Base class for errors reported back to the calling agent as text."""

    code = "toolgate_error"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        action_hint: str | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        self.action_hint = action_hint
        super().__init__(message)

    def to_text(self) -> str:
        """Render the error the way tool outcomes are rendered."""
        text = f"Error: {self.message}"
        if self.action_hint:
            text += f"\nHint: {self.action_hint}"
        return text


class InvalidPayloadError(ToolgateError):
    """Raised when a proposal is malformed. No action id is issued."""

    code = "invalid_payload"


class UnknownToolError(ToolgateError):
    """Raised when a tool name is not registered."""

    code = "unknown_tool"

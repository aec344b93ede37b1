"""Tool registry and dispatch for agent tool calls."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

import structlog
from prometheus_client import Counter
from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import ToolgateError, UnknownToolError

logger = structlog.get_logger(__name__)

TOOL_CALLS = Counter(
    "toolgate_tool_calls_total",
    "Total number of tool calls dispatched",
    ["tool", "outcome"],
)


class ToolArguments(BaseModel):
    """Base model for tool arguments."""

    model_config = ConfigDict(extra="forbid")


class NoArguments(ToolArguments):
    """Arguments model for tools that take none."""


ToolHandler = Callable[[Any], Awaitable[str]]


@dataclass
class ToolSpec:
    """A named tool with validated arguments."""

    name: str
    description: str
    arguments: type[ToolArguments]
    handler: ToolHandler = field(repr=False)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.arguments.model_json_schema(),
        }


class ToolDispatcher:
    """Maps tool names to handlers. Every call yields text, never an exception."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def tool(
        self,
        name: str,
        description: str,
        arguments: type[ToolArguments] = NoArguments,
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Decorator to register a tool handler.

        Args:
            name: Tool name exposed to the agent
            description: Human-readable description
            arguments: Pydantic model the raw arguments are validated against

        Returns:
            Decorator function
        """
        def decorator(handler: ToolHandler) -> ToolHandler:
            if name in self._tools:
                logger.warning("Overriding existing tool", tool=name)
            self._tools[name] = ToolSpec(name, description, arguments, handler)
            logger.debug("Registered tool", tool=name)
            return handler

        return decorator

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def get(self, name: str) -> ToolSpec:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(
                f"Unknown tool '{name}'",
                details={"available_tools": sorted(self._tools)},
                action_hint=f"Available tools: {', '.join(sorted(self._tools))}",
            ) from None

    def list_tools(self) -> list[dict[str, Any]]:
        return [spec.describe() for spec in self._tools.values()]

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> str:
        """Validate arguments and run a tool.

        Args:
            name: Tool name
            arguments: Raw arguments as received from the caller

        Returns:
            Outcome text for the caller
        """
        try:
            spec = self.get(name)
            parsed = spec.arguments.model_validate(arguments or {})
            text = await spec.handler(parsed)
        except ValidationError as e:
            TOOL_CALLS.labels(tool=name, outcome="invalid_arguments").inc()
            logger.warning("Invalid tool arguments", tool=name, errors=e.errors())
            return f"Error: invalid arguments for '{name}': {_format_validation_error(e)}"
        except ToolgateError as e:
            TOOL_CALLS.labels(tool=name, outcome=e.code).inc()
            logger.warning("Tool call rejected", tool=name, code=e.code, error=e.message)
            return e.to_text()
        except Exception as e:
            TOOL_CALLS.labels(tool=name, outcome="error").inc()
            logger.exception("Tool call failed", tool=name)
            return f"Error: tool '{name}' failed: {e}"

        TOOL_CALLS.labels(tool=name, outcome="ok").inc()
        return text


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)

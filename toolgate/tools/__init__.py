"""Tools exposed to the calling agent."""

from ..actions import ActionRegistry
from ..config import GateSettings
from .dispatcher import ToolDispatcher, ToolSpec
from .filesystem import register_filesystem_tools
from .review import register_review_tools


def create_dispatcher(registry: ActionRegistry, settings: GateSettings | None = None) -> ToolDispatcher:
    """Build a dispatcher with the review workflow and filesystem tools."""
    settings = settings or GateSettings()
    dispatcher = ToolDispatcher()
    register_review_tools(dispatcher, registry)
    register_filesystem_tools(dispatcher, encoding=settings.file_encoding)
    return dispatcher


__all__ = ["ToolDispatcher", "ToolSpec", "create_dispatcher"]

"""Read-only filesystem tools."""

import asyncio
from pathlib import Path

import structlog
from pydantic import Field

from .dispatcher import ToolArguments, ToolDispatcher

logger = structlog.get_logger(__name__)


async def read_file(path: str, encoding: str = "utf-8") -> str:
    """Return the text of a file, or an error message."""
    try:
        return await asyncio.to_thread(Path(path).expanduser().read_text, encoding=encoding)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Failed to read file", path=path, error=str(e))
        return f"Error reading file: {e}"


def _list_sync(path: Path) -> list[str]:
    entries = sorted(path.iterdir(), key=lambda entry: entry.name)
    return [
        f"{'[DIR] ' if entry.is_dir() else '[FILE]'} {entry.name}"
        for entry in entries
    ]


async def list_directory(path: str) -> str:
    """List the entries of a directory, one per line."""
    try:
        lines = await asyncio.to_thread(_list_sync, Path(path).expanduser())
    except (OSError, ValueError) as e:
        logger.warning("Failed to list directory", path=path, error=str(e))
        return f"Error listing directory: {e}"

    return "\n".join(lines) or "Empty directory"


class PathArguments(ToolArguments):
    path: str = Field(description="Absolute path on the local filesystem")


def register_filesystem_tools(dispatcher: ToolDispatcher, encoding: str = "utf-8") -> None:
    """Register the read-only filesystem tools on ``dispatcher``."""

    @dispatcher.tool(
        "read_file",
        "Reads the content of a file from the local filesystem.",
        PathArguments,
    )
    async def read_file_tool(args: PathArguments) -> str:
        return await read_file(args.path, encoding=encoding)

    @dispatcher.tool(
        "list_directory",
        "Lists files and directories in a given path.",
        PathArguments,
    )
    async def list_directory_tool(args: PathArguments) -> str:
        return await list_directory(args.path)

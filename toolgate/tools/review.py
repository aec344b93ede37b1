"""Review workflow tools: propose, list, approve and reject actions."""

from pydantic import Field

from ..actions import ActionRegistry
from .dispatcher import ToolArguments, ToolDispatcher


class ProposeWriteFileArguments(ToolArguments):
    path: str = Field(description="Absolute path to the file")
    content: str = Field(description="The content to write")


class ProposeShellCommandArguments(ToolArguments):
    command: str = Field(description="The shell command to execute")


class ActionIdArguments(ToolArguments):
    id: str = Field(description="The ID of the pending action")


def _proposed_text(what: str, action_id: str) -> str:
    return (
        f"Action Proposed: {what}.\n"
        f"ID: {action_id}\n\n"
        f"Please ask the user to approve this with 'approve_action(\"{action_id}\")'."
    )


def register_review_tools(dispatcher: ToolDispatcher, registry: ActionRegistry) -> None:
    """Register the approval workflow tools on ``dispatcher``."""

    @dispatcher.tool(
        "propose_write_file",
        "Proposes a file write. Returns an ID. You must then ask the user to approve this action.",
        ProposeWriteFileArguments,
    )
    async def propose_write_file(args: ProposeWriteFileArguments) -> str:
        action_id = await registry.propose_file_write(args.path, args.content)
        return _proposed_text(f"Write to {args.path}", action_id)

    @dispatcher.tool(
        "propose_shell_command",
        "Proposes a shell command. Returns an ID. You must then ask the user to approve this action.",
        ProposeShellCommandArguments,
    )
    async def propose_shell_command(args: ProposeShellCommandArguments) -> str:
        action_id = await registry.propose_shell_command(args.command)
        return _proposed_text(f"Run command '{args.command}'", action_id)

    @dispatcher.tool(
        "approve_action",
        "Approves and executes a pending action by ID.",
        ActionIdArguments,
    )
    async def approve_action(args: ActionIdArguments) -> str:
        result = await registry.approve(args.id.strip())
        return result.message

    @dispatcher.tool(
        "reject_action",
        "Rejects and discards a pending action by ID.",
        ActionIdArguments,
    )
    async def reject_action(args: ActionIdArguments) -> str:
        result = await registry.reject(args.id.strip())
        return result.message

    @dispatcher.tool(
        "list_pending_actions",
        "Lists all actions waiting for approval.",
    )
    async def list_pending_actions(args: ToolArguments) -> str:
        listing = await registry.list_pending()
        return listing.render()

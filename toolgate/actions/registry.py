"""Registry of proposed actions awaiting operator approval."""

from typing import Any, Iterator

import structlog
from prometheus_client import Counter, Gauge, Histogram

from ..errors import InvalidPayloadError
from .base import (
    ActionKind,
    ActionResult,
    ActionStatus,
    FileWrite,
    PendingAction,
    ShellCommand,
)
from .executor import ActionExecutor
from .store import ActionStore, InMemoryActionStore

logger = structlog.get_logger(__name__)

NO_PENDING_ACTIONS = "No pending actions."

# Prometheus metrics
ACTIONS_PROPOSED = Counter(
    "toolgate_actions_proposed_total",
    "Total number of actions proposed",
    ["kind"],
)

ACTIONS_RESOLVED = Counter(
    "toolgate_actions_resolved_total",
    "Total number of approve/reject resolutions",
    ["kind", "status"],
)

ACTION_DURATION = Histogram(
    "toolgate_action_duration_seconds",
    "Time spent executing approved actions",
    ["kind"],
)

PENDING_ACTIONS = Gauge(
    "toolgate_pending_actions", "Number of actions awaiting approval"
)


class PendingListing:
    """Restartable view over the summaries of a store snapshot."""

    def __init__(self, actions: tuple[PendingAction, ...]) -> None:
        self._actions = actions

    def __iter__(self) -> Iterator[str]:
        return (action.summary() for action in self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def ids(self) -> list[str]:
        return [action.id for action in self._actions]

    def render(self) -> str:
        """Render one line per action, or the empty-registry message."""
        if not self._actions:
            return NO_PENDING_ACTIONS
        return "\n".join(self)


def _not_found(action_id: str) -> ActionResult:
    return ActionResult(
        status=ActionStatus.NOT_FOUND,
        message=f"Error: No pending action found with ID {action_id}",
        action_id=action_id,
        details={"hint": "Call list_pending_actions to see the ids awaiting approval."},
    )


class ActionRegistry:
    """Holds proposed actions until they are approved or rejected.

    Approve and reject both remove the action from the store with a single
    ``take`` before anything else happens, so a given id is resolved at
    most once even when resolutions race.
    """

    def __init__(
        self,
        executor: ActionExecutor | None = None,
        store: ActionStore | None = None,
    ) -> None:
        """Initialize the action registry.

        Args:
            executor: Executor for approved actions
            store: Backing store (defaults to an in-memory store)
        """
        self.executor = executor if executor is not None else ActionExecutor()
        self.store = store if store is not None else InMemoryActionStore()
        self._resolved: dict[str, int] = {status.value: 0 for status in ActionStatus}

        logger.info("Initialized ActionRegistry", store=type(self.store).__name__)

    async def propose_file_write(self, path: str, content: str) -> str:
        """Register a file write for approval.

        Args:
            path: Target file path
            content: Text to write, replacing any existing file

        Returns:
            Id of the pending action

        Raises:
            InvalidPayloadError: If the path is empty or contains a NUL byte
        """
        if not isinstance(path, str) or not path.strip():
            raise InvalidPayloadError(
                "File path must be a non-empty string",
                action_hint="Pass an absolute path to the file to write.",
            )
        if "\x00" in path:
            raise InvalidPayloadError("File path must not contain NUL bytes")
        if not isinstance(content, str):
            raise InvalidPayloadError("File content must be a string")

        action = await self.store.add(lambda action_id: FileWrite(action_id, path, content))
        self._record_proposal(action)
        return action.id

    async def propose_shell_command(self, command: str) -> str:
        """Register a shell command for approval.

        Args:
            command: Command line for the host shell

        Returns:
            Id of the pending action

        Raises:
            InvalidPayloadError: If the command is empty
        """
        if not isinstance(command, str) or not command.strip():
            raise InvalidPayloadError(
                "Command must be a non-empty string",
                action_hint="Pass the full command line to run.",
            )
        if "\x00" in command:
            raise InvalidPayloadError("Command must not contain NUL bytes")

        action = await self.store.add(lambda action_id: ShellCommand(action_id, command))
        self._record_proposal(action)
        return action.id

    async def list_pending(self) -> PendingListing:
        """Return the actions awaiting approval, oldest first."""
        return PendingListing(await self.store.snapshot())

    async def peek(self, action_id: str) -> PendingAction | None:
        """Look up a pending action without resolving it."""
        return await self.store.peek(action_id)

    async def approve(self, action_id: str) -> ActionResult:
        """Approve an action and execute it.

        Args:
            action_id: Id returned when the action was proposed

        Returns:
            Outcome of the execution, or a not-found result
        """
        action = await self.store.take(action_id)
        if action is None:
            logger.warning("Approval for unknown action", action_id=action_id)
            self._record_resolution(None, ActionStatus.NOT_FOUND)
            return _not_found(action_id)

        logger.info("Action approved", action_id=action_id, kind=action.kind.value)

        with ACTION_DURATION.labels(kind=action.kind.value).time():
            result = await self.executor.execute(action)

        self._record_resolution(action, result.status)
        logger.info(
            "Action resolved",
            action_id=action_id,
            kind=action.kind.value,
            status=result.status.value,
            execution_time=result.execution_time_seconds,
        )
        return result

    async def reject(self, action_id: str) -> ActionResult:
        """Discard a pending action without executing it."""
        action = await self.store.take(action_id)
        if action is None:
            logger.warning("Rejection for unknown action", action_id=action_id)
            self._record_resolution(None, ActionStatus.NOT_FOUND)
            return _not_found(action_id)

        self._record_resolution(action, ActionStatus.REJECTED)
        logger.info("Action rejected", action_id=action_id, kind=action.kind.value)
        return ActionResult(
            status=ActionStatus.REJECTED,
            message=f"Action {action_id} rejected and removed.",
            action_id=action_id,
        )

    def _record_proposal(self, action: PendingAction) -> None:
        ACTIONS_PROPOSED.labels(kind=action.kind.value).inc()
        PENDING_ACTIONS.set(self.pending_count)
        logger.info(
            "Action proposed",
            action_id=action.id,
            kind=action.kind.value,
            summary=action.summary(),
        )

    def _record_resolution(self, action: PendingAction | None, status: ActionStatus) -> None:
        kind = action.kind.value if action is not None else "unknown"
        ACTIONS_RESOLVED.labels(kind=kind, status=status.value).inc()
        PENDING_ACTIONS.set(self.pending_count)
        self._resolved[status.value] += 1

    @property
    def pending_count(self) -> int:
        return len(self.store)

    def get_stats(self) -> dict[str, Any]:
        """Get registry statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            "pending_actions": self.pending_count,
            "resolved": dict(self._resolved),
            "action_kinds": [kind.value for kind in ActionKind],
        }

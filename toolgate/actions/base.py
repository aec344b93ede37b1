"""Pending action variants and execution results."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union


class ActionKind(Enum):
    """Kinds of side effect an agent can propose."""

    FILE_WRITE = "file_write"
    SHELL_COMMAND = "shell_command"


class ActionStatus(Enum):
    """Terminal outcome of resolving a pending action."""

    EXECUTED = "executed"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"
    EXECUTION_FAILURE = "execution_failure"
    TIMEOUT = "timeout"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _one_line(text: str) -> str:
    """Escape newlines and other non-printable characters."""
    return "".join(ch if ch.isprintable() else repr(ch)[1:-1] for ch in text)


@dataclass(frozen=True)
class FileWrite:
    """Proposed write of ``content`` to ``path``."""

    id: str
    path: str
    content: str
    created_at: datetime = field(default_factory=_utcnow, compare=False)

    kind = ActionKind.FILE_WRITE

    def summary(self) -> str:
        return f"[{self.id}] Write file: {_one_line(self.path)}"


@dataclass(frozen=True)
class ShellCommand:
    """Proposed run of ``command`` through the host shell."""

    id: str
    command: str
    created_at: datetime = field(default_factory=_utcnow, compare=False)

    kind = ActionKind.SHELL_COMMAND

    def summary(self) -> str:
        return f"[{self.id}] Run command: {_one_line(self.command)}"


PendingAction = Union[FileWrite, ShellCommand]


@dataclass
class ActionResult:
    """Result of approving or rejecting an action."""

    status: ActionStatus
    message: str
    action_id: str
    details: dict[str, Any] = field(default_factory=dict)
    execution_time_seconds: float = 0.0

"""Approval-gated action workflow."""

from .base import ActionKind, ActionResult, ActionStatus, FileWrite, PendingAction, ShellCommand
from .executor import ActionExecutor
from .registry import NO_PENDING_ACTIONS, ActionRegistry, PendingListing
from .store import ActionStore, InMemoryActionStore

__all__ = [
    "ActionKind",
    "ActionResult",
    "ActionStatus",
    "FileWrite",
    "PendingAction",
    "ShellCommand",
    "ActionExecutor",
    "ActionRegistry",
    "PendingListing",
    "NO_PENDING_ACTIONS",
    "ActionStore",
    "InMemoryActionStore",
]

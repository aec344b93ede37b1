"""Storage for actions awaiting approval."""

import asyncio
import secrets
from abc import ABC, abstractmethod
from typing import Callable

import structlog

from .base import PendingAction

logger = structlog.get_logger(__name__)

# No look-alike characters (0/o, 1/l/i) so ids can be retyped by hand.
ID_ALPHABET = "abcdefghjkmnpqrstuvwxyz23456789"


def generate_action_id(length: int = 8) -> str:
    """Generate a short random action identifier."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


class ActionStore(ABC):
    """Interface for the registry's backing store.

    ``take`` must look up and remove an entry as one indivisible step. The
    approve/reject contract depends on it for at-most-once execution.
    """

    @abstractmethod
    async def add(self, build: Callable[[str], PendingAction]) -> PendingAction:
        """Allocate a fresh id, store ``build(id)`` under it and return it."""

    @abstractmethod
    async def peek(self, action_id: str) -> PendingAction | None:
        """Return the pending action without removing it."""

    @abstractmethod
    async def take(self, action_id: str) -> PendingAction | None:
        """Remove and return the pending action, or None if absent."""

    @abstractmethod
    async def snapshot(self) -> tuple[PendingAction, ...]:
        """Return all pending actions in proposal order."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of pending actions."""


class InMemoryActionStore(ActionStore):
    """Process-lifetime store backed by a dict."""

    def __init__(self, id_length: int = 8, max_attempts: int = 100) -> None:
        """Initialize the store.

        Args:
            id_length: Number of characters in generated ids
            max_attempts: Id generation attempts before giving up
        """
        self._actions: dict[str, PendingAction] = {}
        self._lock = asyncio.Lock()
        self._id_length = id_length
        self._max_attempts = max_attempts

        logger.info("Initialized InMemoryActionStore", id_length=id_length)

    async def add(self, build: Callable[[str], PendingAction]) -> PendingAction:
        async with self._lock:
            for _ in range(self._max_attempts):
                action_id = generate_action_id(self._id_length)
                if action_id not in self._actions:
                    break
            else:
                raise RuntimeError("Could not allocate a unique action id")

            action = build(action_id)
            self._actions[action_id] = action
            return action

    async def peek(self, action_id: str) -> PendingAction | None:
        async with self._lock:
            return self._actions.get(action_id)

    async def take(self, action_id: str) -> PendingAction | None:
        async with self._lock:
            return self._actions.pop(action_id, None)

    async def snapshot(self) -> tuple[PendingAction, ...]:
        async with self._lock:
            return tuple(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

"""Pytest configuration and fixtures for toolgate tests."""

import pytest

from toolgate.actions import (
    ActionExecutor,
    ActionRegistry,
    ActionResult,
    ActionStatus,
    InMemoryActionStore,
)
from toolgate.config import GateSettings
from toolgate.tools import create_dispatcher


class RecordingExecutor(ActionExecutor):
    """Executor that records actions instead of touching the system."""

    def __init__(self) -> None:
        super().__init__()
        self.executed = []

    async def execute(self, action):
        self.executed.append(action)
        return ActionResult(
            status=ActionStatus.EXECUTED,
            message=f"Recorded {action.id}",
            action_id=action.id,
        )


@pytest.fixture
def gate_settings():
    """Provide test settings."""
    return GateSettings(
        log_level="DEBUG",
        log_format="console",
        shell_timeout_seconds=5,
        max_output_chars=1000,
    )


@pytest.fixture
def executor(gate_settings):
    """Provide a real executor with a short timeout."""
    return ActionExecutor(
        shell_timeout_seconds=gate_settings.shell_timeout_seconds,
        max_output_chars=gate_settings.max_output_chars,
    )


@pytest.fixture
def registry(executor):
    """Provide an ActionRegistry backed by a fresh in-memory store."""
    return ActionRegistry(executor=executor, store=InMemoryActionStore())


@pytest.fixture
def recording_executor():
    """Provide an executor that never performs side effects."""
    return RecordingExecutor()


@pytest.fixture
def recording_registry(recording_executor):
    """Provide a registry whose approvals are only recorded."""
    return ActionRegistry(executor=recording_executor, store=InMemoryActionStore())


@pytest.fixture
def dispatcher(registry, gate_settings):
    """Provide a dispatcher with all tools registered."""
    return create_dispatcher(registry, gate_settings)

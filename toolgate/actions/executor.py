"""Executes the side effect of an approved action."""

import asyncio
import os
import signal
import time
from pathlib import Path

import structlog

from .base import ActionResult, ActionStatus, FileWrite, PendingAction, ShellCommand

logger = structlog.get_logger(__name__)


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + f"\n... [truncated {len(text) - limit} characters]"


class ActionExecutor:
    """Applies file writes and shell commands for approved actions."""

    def __init__(
        self,
        shell_timeout_seconds: float = 60.0,
        shell_executable: str | None = None,
        max_output_chars: int = 20000,
        file_encoding: str = "utf-8",
    ) -> None:
        """Initialize the executor.

        Args:
            shell_timeout_seconds: Kill commands that run longer than this
            shell_executable: Shell to run commands with (None for /bin/sh)
            max_output_chars: Truncate each captured stream to this length
            file_encoding: Encoding for file writes
        """
        self.shell_timeout_seconds = shell_timeout_seconds
        self.shell_executable = shell_executable
        self.max_output_chars = max_output_chars
        self.file_encoding = file_encoding

    async def execute(self, action: PendingAction) -> ActionResult:
        """Perform the action's side effect and report the outcome.

        Never raises for I/O or process errors; those become failed results.
        """
        start_time = time.monotonic()

        if isinstance(action, FileWrite):
            result = await self._write_file(action)
        elif isinstance(action, ShellCommand):
            result = await self._run_shell(action)
        else:
            raise TypeError(f"Unsupported action type: {type(action).__name__}")

        result.execution_time_seconds = time.monotonic() - start_time
        return result

    async def _write_file(self, action: FileWrite) -> ActionResult:
        target = Path(action.path).expanduser()

        try:
            resolved = await asyncio.to_thread(self._write_sync, target, action.content)
        except (OSError, ValueError) as e:
            logger.error(
                "File write failed",
                action_id=action.id,
                path=action.path,
                error=str(e),
            )
            return ActionResult(
                status=ActionStatus.IO_FAILURE,
                message=f"Error writing file: {e}",
                action_id=action.id,
                details={"path": action.path, "error": str(e), "error_type": type(e).__name__},
            )

        logger.info("File written", action_id=action.id, path=str(resolved))
        return ActionResult(
            status=ActionStatus.EXECUTED,
            message=f"Successfully wrote to {resolved}",
            action_id=action.id,
            details={"path": str(resolved), "bytes": len(action.content.encode(self.file_encoding))},
        )

    def _write_sync(self, target: Path, content: str) -> Path:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding=self.file_encoding)
        return target.resolve()

    async def _run_shell(self, action: ShellCommand) -> ActionResult:
        logger.info("Running shell command", action_id=action.id, command=action.command)

        try:
            process = await asyncio.create_subprocess_shell(
                action.command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                executable=self.shell_executable,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            logger.error(
                "Failed to spawn shell command",
                action_id=action.id,
                command=action.command,
                error=str(e),
            )
            return ActionResult(
                status=ActionStatus.EXECUTION_FAILURE,
                message=f"Error executing command: {e}",
                action_id=action.id,
                details={"command": action.command, "error": str(e)},
            )

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                process.communicate(), timeout=self.shell_timeout_seconds
            )
        except asyncio.TimeoutError:
            # The shell leads its own process group; kill the whole group so
            # children holding the output pipes die with it.
            try:
                os.killpg(process.pid, signal.SIGKILL)
            except ProcessLookupError:
                pass  # exited between the timeout and the kill
            await process.wait()
            logger.warning(
                "Shell command timed out",
                action_id=action.id,
                command=action.command,
                timeout=self.shell_timeout_seconds,
            )
            return ActionResult(
                status=ActionStatus.TIMEOUT,
                message=f"Command timed out after {self.shell_timeout_seconds:g} seconds and was killed.",
                action_id=action.id,
                details={"command": action.command, "timeout_seconds": self.shell_timeout_seconds},
            )

        stdout = _truncate(stdout_bytes.decode(errors="replace"), self.max_output_chars)
        stderr = _truncate(stderr_bytes.decode(errors="replace"), self.max_output_chars)
        exit_code = process.returncode

        # Non-zero exit is reported, not treated as a failure.
        logger.info(
            "Shell command finished",
            action_id=action.id,
            exit_code=exit_code,
        )
        return ActionResult(
            status=ActionStatus.EXECUTED,
            message=(
                f"Command executed (exit code {exit_code}).\n"
                f"Stdout: {stdout}\n"
                f"Stderr: {stderr}"
            ),
            action_id=action.id,
            details={
                "command": action.command,
                "exit_code": exit_code,
                "stdout": stdout,
                "stderr": stderr,
            },
        )

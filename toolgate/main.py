"""Main entry point for the toolgate server."""

import asyncio
import signal
import sys

import structlog
from prometheus_client import start_http_server

from . import __version__
from .actions import ActionExecutor, ActionRegistry, InMemoryActionStore
from .config import GateSettings
from .server import ToolServer
from .tools import create_dispatcher
from .utils import setup_logging

logger = structlog.get_logger(__name__)


def build_server(settings: GateSettings) -> ToolServer:
    """Wire the registry, executor, dispatcher and HTTP server together."""
    executor = ActionExecutor(
        shell_timeout_seconds=settings.shell_timeout_seconds,
        shell_executable=settings.shell_executable,
        max_output_chars=settings.max_output_chars,
        file_encoding=settings.file_encoding,
    )
    registry = ActionRegistry(
        executor=executor,
        store=InMemoryActionStore(id_length=settings.action_id_length),
    )
    dispatcher = create_dispatcher(registry, settings)

    return ToolServer(dispatcher, registry, host=settings.host, port=settings.port)


async def serve(settings: GateSettings) -> None:
    """Run the server until SIGINT or SIGTERM."""
    logger.info("Starting toolgate", version=__version__)

    if settings.metrics_enabled:
        start_http_server(settings.metrics_port)
        logger.info("Started Prometheus metrics server", port=settings.metrics_port)

    server = build_server(settings)
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Signal handlers are unavailable on Windows event loops.
            pass

    await server.start()
    try:
        await stop_event.wait()
    finally:
        logger.info("Shutting down toolgate")
        await server.stop()


def main() -> None:
    """Main entry point for the server."""
    settings = GateSettings()
    setup_logging(settings.log_level, settings.log_format)

    try:
        asyncio.run(serve(settings))
    except OSError as e:
        logger.error("Server failed to start", error=str(e), host=settings.host, port=settings.port)
        sys.exit(1)


if __name__ == "__main__":
    main()

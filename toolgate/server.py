"""HTTP server exposing the tool dispatcher, health checks and metrics."""

from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from . import __version__
from .actions import ActionRegistry
from .tools import ToolDispatcher

logger = structlog.get_logger(__name__)


class ToolServer:
    """HTTP front end for tool calls plus operational endpoints."""

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        registry: Optional[ActionRegistry] = None,
        host: str = "127.0.0.1",
        port: int = 8765,
    ) -> None:
        """Initialize the tool server.

        Args:
            dispatcher: Dispatcher that runs tool calls
            registry: Action registry, used for readiness and stats
            host: Interface to bind
            port: Port to listen on
        """
        self.dispatcher = dispatcher
        self.registry = registry
        self.host = host
        self.port = port
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None
        self.site: Optional[web.TCPSite] = None
        self._startup_time = datetime.now(timezone.utc)

        # Setup routes
        self.app.router.add_get('/healthz', self._health_handler)
        self.app.router.add_get('/readyz', self._readiness_handler)
        self.app.router.add_get('/stats', self._stats_handler)
        self.app.router.add_get('/metrics', self._metrics_handler)
        self.app.router.add_get('/tools', self._list_tools_handler)
        self.app.router.add_post('/tools/{name}', self._call_tool_handler)

        logger.info("Initialized ToolServer", host=host, port=port)

    async def start(self) -> None:
        """Start serving."""
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()

        self.site = web.TCPSite(self.runner, self.host, self.port)
        await self.site.start()

        logger.info("Tool server started", host=self.host, port=self.port)

    async def stop(self) -> None:
        """Stop serving."""
        if self.site:
            await self.site.stop()
            self.site = None

        if self.runner:
            await self.runner.cleanup()
            self.runner = None

        logger.info("Tool server stopped")

    def _uptime_seconds(self) -> float:
        return (datetime.now(timezone.utc) - self._startup_time).total_seconds()

    async def _health_handler(self, request: web.Request) -> web.Response:
        """Handle liveness requests."""
        return web.json_response({
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime_seconds": self._uptime_seconds(),
            "version": __version__,
        })

    async def _readiness_handler(self, request: web.Request) -> web.Response:
        """Handle readiness requests."""
        checks = {
            "action_registry": "available" if self.registry is not None else "not_available",
        }
        ready = self.registry is not None

        return web.json_response(
            {
                "status": "ready" if ready else "not_ready",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "checks": checks,
            },
            status=200 if ready else 503,
        )

    async def _stats_handler(self, request: web.Request) -> web.Response:
        """Handle statistics requests."""
        stats: dict[str, Any] = {
            "server": {
                "uptime_seconds": self._uptime_seconds(),
                "startup_time": self._startup_time.isoformat(),
                "version": __version__,
            },
            "tools": sorted(tool["name"] for tool in self.dispatcher.list_tools()),
        }

        if self.registry is not None:
            stats["actions"] = self.registry.get_stats()

        return web.json_response(stats)

    async def _metrics_handler(self, request: web.Request) -> web.Response:
        """Handle Prometheus metrics exposition."""
        return web.Response(
            body=generate_latest(),
            headers={"Content-Type": CONTENT_TYPE_LATEST},
        )

    async def _list_tools_handler(self, request: web.Request) -> web.Response:
        return web.json_response({"tools": self.dispatcher.list_tools()})

    async def _call_tool_handler(self, request: web.Request) -> web.Response:
        """Run a tool with the JSON object in the request body as arguments."""
        name = request.match_info["name"]

        if name not in self.dispatcher:
            return web.json_response(
                {"tool": name, "text": f"Error: Unknown tool '{name}'"},
                status=404,
            )

        arguments: Any = {}
        if request.can_read_body:
            try:
                arguments = await request.json()
            except ValueError as e:  # JSONDecodeError or UnicodeDecodeError
                return web.json_response(
                    {"tool": name, "text": f"Error: request body is not valid JSON: {e}"},
                    status=400,
                )

        if not isinstance(arguments, dict):
            return web.json_response(
                {"tool": name, "text": "Error: request body must be a JSON object"},
                status=400,
            )

        logger.debug("Dispatching tool call", tool=name)
        text = await self.dispatcher.call(name, arguments)
        return web.json_response({"tool": name, "text": text})

"""
Uvicorn embedded in the application's event loop

The tick loop, MIDI input and HTTP server share one loop, so request
handlers and ticks interleave only at await points and the transition
service lock is enough to keep them apart.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import uvicorn
from fastapi import FastAPI

from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:
    """
    start() serves until stop() is called; uvicorn's own signal handling is
    disabled because SIGINT/SIGTERM belong to the ShutdownCoordinator.
    """

    def __init__(self, app: FastAPI, host: str = "0.0.0.0", port: int = 8000, log_level: str = "warning"):
        self.app = app
        self.host = host
        self.port = port
        self.log_level = log_level
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._stopped = asyncio.Event()

    def _build_server(self) -> uvicorn.Server:
        server = uvicorn.Server(uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level=self.log_level,
            access_log=False,
            server_header=False,
        ))
        server.install_signal_handlers = lambda: None  # type: ignore[method-assign]
        return server

    async def start(self, startup_timeout: float = 5.0) -> None:
        """
        Serve until stop()

        Raises:
            RuntimeError: Already serving
        """
        if self.is_running:
            raise RuntimeError("API server already running")

        self._stopped.clear()
        self._server = self._build_server()
        self._serve_task = asyncio.create_task(self._server.serve(), name="uvicorn")
        log.info("API server starting", url=f"http://{self.host}:{self.port}")

        try:
            await self._wait_started(startup_timeout)
            await self._stopped.wait()
        except asyncio.CancelledError:
            await self.stop()
            raise

    async def _wait_started(self, timeout: float) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while loop.time() < deadline:
            if self._server is not None and self._server.started:
                log.info("API server listening", port=self.port)
                return
            if self._serve_task is not None and self._serve_task.done():
                # Propagates bind errors to the watcher of start()
                await self._serve_task
                return
            await asyncio.sleep(0.05)
        log.warn("API server not started yet", timeout_s=timeout)

    async def stop(self, shutdown_timeout: float = 2.0) -> None:
        self._stopped.set()
        server, task = self._server, self._serve_task
        self._server = self._serve_task = None

        if server is None:
            return

        server.should_exit = True
        server.force_exit = True
        if task is not None and not task.done():
            try:
                await asyncio.wait_for(asyncio.shield(task), timeout=shutdown_timeout)
            except asyncio.TimeoutError:
                log.warn("API server did not exit in time, cancelling", timeout_s=shutdown_timeout)
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)

        log.info("API server stopped")

    @property
    def is_running(self) -> bool:
        return self._serve_task is not None and not self._serve_task.done()

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._serve_task

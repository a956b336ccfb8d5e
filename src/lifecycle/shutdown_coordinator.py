"""
Graceful shutdown

The coordinator decides WHEN the process stops (signal, explicit request,
or a watched task dying with an exception) and then runs every registered
handler once, highest shutdown_priority first.
"""

import asyncio
import signal
from typing import List, Optional, Set

from lifecycle.shutdown_protocol import IShutdownHandler
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.LIFECYCLE)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownCoordinator:
    """
    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(TickLoopShutdownHandler(tick_loop, service))
        coordinator.watch(tick_loop.task)
        coordinator.setup_signal_handlers(asyncio.get_running_loop())

        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Args:
            timeout_per_handler: Seconds one handler may take before it is abandoned
            total_timeout: Seconds after which remaining handlers are skipped
        """
        self.timeout_per_handler = timeout_per_handler
        self.total_timeout = total_timeout

        self._handlers: List[IShutdownHandler] = []
        self._watched: Set[asyncio.Task] = set()
        self._requested = asyncio.Event()
        self._reason: Optional[str] = None

    # === Setup ===

    def register(self, handler: IShutdownHandler) -> None:
        """
        Raises:
            ValueError: handler lacks shutdown_priority or shutdown()
        """
        for member in ("shutdown_priority", "shutdown"):
            if not hasattr(handler, member):
                raise ValueError(f"{type(handler).__name__} is not a shutdown handler (missing {member})")
        self._handlers.append(handler)
        log.debug("Shutdown handler registered", handler=type(handler).__name__, priority=handler.shutdown_priority)

    def watch(self, task: Optional[asyncio.Task]) -> None:
        """Request shutdown when task ends with an exception"""
        if task is not None:
            self._watched.add(task)

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        for sig in SHUTDOWN_SIGNALS:
            loop.add_signal_handler(sig, self.request_shutdown, sig.name)
        log.debug("Signal handlers installed", signals=[s.name for s in SHUTDOWN_SIGNALS])

    def get_handler(self, handler_type: type) -> Optional[IShutdownHandler]:
        return next((h for h in self._handlers if isinstance(h, handler_type)), None)

    # === Trigger ===

    def request_shutdown(self, reason: str) -> None:
        """First reason wins; later requests are no-ops"""
        if self._reason is None:
            self._reason = reason
            log.info("Shutdown requested", reason=reason)
        self._requested.set()

    @property
    def shutdown_requested(self) -> bool:
        return self._requested.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    async def wait_for_shutdown(self) -> None:
        """Block until a shutdown request or a watched task failure"""
        while not self._requested.is_set():
            waiter = asyncio.ensure_future(self._requested.wait())
            try:
                done, _ = await asyncio.wait(self._watched | {waiter}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                waiter.cancel()

            for task in done - {waiter}:
                self._watched.discard(task)
                if task.cancelled():
                    continue
                error = task.exception()
                if error is not None:
                    log.error("Watched task failed", task=task.get_name(), exception=error)
                    self.request_shutdown(f"{task.get_name()} failed")
                else:
                    log.debug("Watched task finished", task=task.get_name())

    # === Shutdown ===

    async def shutdown_all(self) -> None:
        """Run every handler once, highest priority first; failures are logged and skipped"""
        log.info("Shutting down", reason=self._reason or "unknown", handlers=len(self._handlers))

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.total_timeout

        for handler in sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True):
            name = type(handler).__name__
            remaining = deadline - loop.time()
            if remaining <= 0:
                log.error("Shutdown deadline exceeded, skipping remaining handlers", next=name)
                break

            try:
                await asyncio.wait_for(handler.shutdown(), timeout=min(self.timeout_per_handler, remaining))
                log.debug("Handler done", handler=name)
            except asyncio.TimeoutError:
                log.error("Handler timed out", handler=name, timeout_s=self.timeout_per_handler)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                log.error("Handler failed", handler=name, exception=e)

        log.info("Shutdown complete")

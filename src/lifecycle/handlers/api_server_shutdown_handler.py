from __future__ import annotations

from typing import TYPE_CHECKING

from models.enums import LogCategory
from utils.logger import get_logger

if TYPE_CHECKING:
    from lifecycle.api_server_wrapper import APIServerWrapper

log = get_logger().for_category(LogCategory.SHUTDOWN)


class APIServerShutdownHandler:
    """Stops uvicorn once the engine no longer ticks"""

    shutdown_priority = 90

    def __init__(self, api_wrapper: "APIServerWrapper"):
        self.api_wrapper = api_wrapper

    async def shutdown(self) -> None:
        if self.api_wrapper.is_running:
            await self.api_wrapper.stop()
        else:
            log.debug("API server already stopped")

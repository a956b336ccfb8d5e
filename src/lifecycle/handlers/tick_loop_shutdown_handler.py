from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from models.enums import LogCategory
from utils.logger import get_logger

if TYPE_CHECKING:
    from engine.tick_loop import TickLoop
    from services.transition_service import TransitionService

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TickLoopShutdownHandler:
    """
    Stops the engine clock, then drops pending transitions so every
    attribute keeps the value of the last tick.
    """

    shutdown_priority = 100

    def __init__(self, tick_loop: "TickLoop", service: Optional["TransitionService"] = None):
        self.tick_loop = tick_loop
        self.service = service

    async def shutdown(self) -> None:
        await self.tick_loop.stop()
        if self.service is not None:
            discarded = await self.service.reset()
            log.info("Tick loop stopped", pending_discarded=discarded)

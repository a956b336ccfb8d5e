from __future__ import annotations

import asyncio
from typing import Iterable

from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler:
    """Cancels leftover background tasks (MIDI input) and waits for them to unwind"""

    shutdown_priority = 40

    def __init__(self, tasks: Iterable[asyncio.Task]):
        self.tasks = list(tasks)

    async def shutdown(self) -> None:
        pending = [t for t in self.tasks if not t.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        log.debug("Background tasks cancelled", cancelled=[t.get_name() for t in pending])

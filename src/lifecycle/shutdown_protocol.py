"""Contract between the ShutdownCoordinator and the components it stops"""

from typing import Protocol


class IShutdownHandler(Protocol):
    """
    Handlers run once, highest shutdown_priority first:

        110  MIDI device port
        100  tick loop (freeze attributes)
         90  API server
         40  background tasks (MIDI input)
    """

    @property
    def shutdown_priority(self) -> int:
        ...

    async def shutdown(self) -> None:
        ...

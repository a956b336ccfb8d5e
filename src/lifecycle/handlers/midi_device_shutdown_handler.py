from __future__ import annotations

from typing import TYPE_CHECKING

from models.enums import LogCategory
from utils.logger import get_logger

if TYPE_CHECKING:
    from hardware.input.midi_device import MidiDevice

log = get_logger().for_category(LogCategory.SHUTDOWN)


class MidiDeviceShutdownHandler:
    """Closes the MIDI port first so no message arrives during shutdown"""

    shutdown_priority = 110

    def __init__(self, device: "MidiDevice"):
        self.device = device

    async def shutdown(self) -> None:
        if self.device.is_open:
            self.device.close()
        else:
            log.debug("MIDI device not open")

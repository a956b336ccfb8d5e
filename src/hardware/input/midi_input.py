"""
MIDI input translation

Turns raw 3-byte MIDI messages (status, control, value) into bus events:
- controls registered as knobs (plus the big knob) → MidiKnobEvent
- any other control → MidiPadEvent, pressed when status > 128

MidiDevice (hardware.input.midi_device) pushes device messages with
feed(); tests call feed() or receive_update() directly. run() drains the queue.
"""

import asyncio
from typing import Iterable, Optional, Sequence, Set, Tuple

from models.domain.midi import MidiLayout
from models.enums import LogCategory
from models.events import MidiKnobEvent, MidiPadEvent
from services.event_bus import EventBus
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.MIDI)

MAX_MESSAGES_PER_CYCLE = 100

MidiMessage = Tuple[Sequence[int], float]


class MidiInput:
    """
    MIDI message → event translator

    Example:
        midi = MidiInput(event_bus, MidiLayout())
        await midi.receive_update(176, 10, 66, 0.01)   # knob 1 turned right
        await midi.receive_update(144, 44, 127, 0.0)   # pad 1 pressed
    """

    def __init__(self, event_bus: EventBus, layout: Optional[MidiLayout] = None, poll_interval: float = 0.005):
        self.event_bus = event_bus
        self.layout = layout or MidiLayout()
        self.poll_interval = poll_interval
        self.knob_codes: Set[int] = set(self.layout.knobs)
        self.knob_codes.add(self.layout.big_knob)

        self._queue: "asyncio.Queue[MidiMessage]" = asyncio.Queue()
        self.messages_received = 0
        self.messages_dropped = 0

    def register_knobs(self, codes: Iterable[int]) -> None:
        """Treat additional controller codes as knobs"""
        self.knob_codes.update(codes)

    async def receive_update(self, status: int, control: int, value: int, delta_time: float = 0.0) -> None:
        """Translate one message and publish the resulting event"""
        self.messages_received += 1
        if control in self.knob_codes:
            await self.event_bus.publish(MidiKnobEvent(control, value, delta_time))
        else:
            await self.event_bus.publish(MidiPadEvent(control, status > 128))

    # === Queue feeding ===

    def feed(self, message: Sequence[int], delta_time: float = 0.0) -> None:
        """Queue a raw message (thread-unsafe; use loop.call_soon_threadsafe from device threads)"""
        self._queue.put_nowait((message, delta_time))

    async def receive_updates(self) -> int:
        """
        Drain queued messages, at most MAX_MESSAGES_PER_CYCLE per call

        Messages that are not exactly 3 bytes long are dropped.

        Returns:
            Number of messages translated
        """
        handled = 0
        for _ in range(MAX_MESSAGES_PER_CYCLE):
            try:
                message, delta_time = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break

            if len(message) != 3:
                self.messages_dropped += 1
                log.debug("Dropped MIDI message", length=len(message))
                continue

            status, control, value = message
            await self.receive_update(status, control, value, delta_time)
            handled += 1
        return handled

    async def run(self) -> None:
        """Drain the queue until cancelled"""
        log.info("MIDI input active", knobs=len(self.knob_codes))
        try:
            while True:
                await self.receive_updates()
                await asyncio.sleep(self.poll_interval)
        except asyncio.CancelledError:
            log.debug("MIDI input cancelled")
            raise

"""
MIDI device port

Opens the first input port whose name matches the configured pattern and
forwards every incoming message to MidiInput.feed(). mido delivers
messages on its backend thread, so they are handed to the event loop with
call_soon_threadsafe.
"""

import asyncio
import re
import time
from typing import List, Optional

import mido

from hardware.input.midi_input import MidiInput
from models.domain.midi import DEFAULT_PORT_PATTERN
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.MIDI)


class MidiDevice:
    """
    Example:
        device = MidiDevice(midi_input, asyncio.get_running_loop())
        if device.open():
            ...
        device.close()
    """

    def __init__(self, midi_input: MidiInput, loop: asyncio.AbstractEventLoop, port_pattern: str = DEFAULT_PORT_PATTERN):
        self.midi_input = midi_input
        self.loop = loop
        self.port_pattern = port_pattern
        self._port = None
        self._last_stamp: Optional[float] = None

    @staticmethod
    def available_ports() -> List[str]:
        return list(mido.get_input_names())

    def find_port(self) -> Optional[str]:
        """First port name matching port_pattern (case-insensitive)"""
        pattern = re.compile(self.port_pattern, re.IGNORECASE)
        return next((name for name in self.available_ports() if pattern.search(name)), None)

    def open(self) -> bool:
        """
        Returns:
            False when no matching port exists; the app keeps running without MIDI
        """
        name = self.find_port()
        if name is None:
            log.warn("MIDI device not found", pattern=self.port_pattern, ports=self.available_ports())
            return False

        self._last_stamp = None
        self._port = mido.open_input(name, callback=self._on_message)
        log.info("MIDI device opened", port=name)
        return True

    def _on_message(self, message: "mido.Message") -> None:
        # Backend thread
        now = time.monotonic()
        delta_time = now - self._last_stamp if self._last_stamp is not None else 0.0
        self._last_stamp = now
        self.loop.call_soon_threadsafe(self.midi_input.feed, message.bytes(), delta_time)

    def close(self) -> None:
        if self._port is None:
            return
        self._port.close()
        self._port = None
        log.info("MIDI device closed")

    @property
    def is_open(self) -> bool:
        return self._port is not None

"""MIDI input events"""

from dataclasses import dataclass

from models.enums import EventSource
from models.events.base import Event
from models.events.types import EventType


@dataclass(init=False)
class MidiKnobEvent(Event):
    """Relative knob turn; value 64 means no movement"""
    control: int
    value: int
    delta_time: float

    def __init__(self, control: int, value: int, delta_time: float = 0.0):
        """
        Args:
            control: MIDI controller code
            value: Raw value (0-127), centered on 64
            delta_time: Seconds since the previous MIDI message
        """
        super().__init__(type=EventType.MIDI_KNOB, source=EventSource.MIDI)
        self.control = control
        self.value = value
        self.delta_time = delta_time


@dataclass(init=False)
class MidiPadEvent(Event):
    """Pad press or release"""
    control: int
    pressed: bool

    def __init__(self, control: int, pressed: bool):
        super().__init__(type=EventType.MIDI_PAD, source=EventSource.MIDI)
        self.control = control
        self.pressed = pressed

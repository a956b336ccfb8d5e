"""
Event system for glissando

MIDI input events feed the controllers; transition events report what the
transition service registered.
"""

from models.events.types import EventType
from models.events.base import Event

from models.events.midi import MidiKnobEvent, MidiPadEvent
from models.events.transition import TransitionRequestedEvent, EngineResetEvent

__all__ = [
    "EventType",
    "Event",
    "MidiKnobEvent",
    "MidiPadEvent",
    "TransitionRequestedEvent",
    "EngineResetEvent",
]

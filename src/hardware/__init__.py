"""
Hardware Layer

Low-level input handling only:

- MIDI input (MidiInput): raw 3-byte messages → bus events
- MIDI device (MidiDevice): device port feeding MidiInput
"""
from .input.midi_device import MidiDevice
from .input.midi_input import MidiInput

__all__ = [
    "MidiDevice",
    "MidiInput",
]

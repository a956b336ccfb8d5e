from enum import Enum, auto


class EventType(Enum):
    # MIDI surface
    MIDI_KNOB = auto()
    MIDI_PAD = auto()

    # Transition service
    TRANSITION_REQUESTED = auto()
    ENGINE_RESET = auto()

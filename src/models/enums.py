"""
Enums shared across the transition engine, services and adapters
"""

from enum import Enum, auto


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    ENGINE = auto()      # Transition engine bookkeeping (add/apply/retire)
    TRANSITION = auto()  # Transition requests from services
    STATE = auto()       # Indexed state stepping
    MIDI = auto()        # MIDI translation and knob bindings
    EVENT = auto()       # Event bus events and handling
    API = auto()         # REST API
    SYSTEM = auto()      # Startup, shutdown, errors
    LIFECYCLE = auto()   # Tick loop start/stop
    SHUTDOWN = auto()    # Graceful shutdown sequence

    GENERAL = auto()     # Default general category


class TransitionKind(Enum):
    """Kinds of transition requests accepted by the transition service"""
    FADE = auto()               # Timed fade to a value (or a set of values)
    IMPULSE = auto()            # Round trip excursion (spline pulse)
    IMMEDIATE_IMPULSE = auto()  # Jump out, smooth return (half spline pulse)
    STATE_DELTA = auto()        # Relative step on an indexed state
    STATE_GOTO = auto()         # Absolute index on an indexed state
    DIRECT = auto()             # Immediate set() without transition


class EventSource(Enum):
    """Event source identifiers"""
    MIDI = auto()
    API = auto()
    TRANSITION_SERVICE = auto()
    APPLICATION = auto()


class MidiControlType(Enum):
    """Kinds of MIDI control bindings"""
    VALUE = auto()   # Knob adds relative offsets to an attribute
    SPEED = auto()   # Knob sets a drift speed, pad stops it
    STATE = auto()   # Knob steps an indexed state
    ACTION = auto()  # Pad triggers an action on press

"""MIDI domain models - device layout and control bindings"""

from dataclasses import dataclass, field
from typing import List, Optional

from models.enums import MidiControlType

# Arturia BeatStep factory mapping
BEATSTEP_KNOBS = [10, 74, 71, 76, 77, 93, 73, 75, 114, 18, 19, 16, 17, 91, 79, 72]
BEATSTEP_PADS = [44, 45, 46, 47, 48, 49, 50, 51, 36, 37, 38, 39, 40, 41, 42, 43]
BEATSTEP_BIG_KNOB = 7
DEFAULT_PORT_PATTERN = "Arturia BeatStep"


@dataclass(frozen=True)
class MidiLayout:
    """
    Controller codes of a MIDI surface

    Knob positions are 1-based (position 0 is the big knob), pad positions
    are 1-based. Pad N sits below knob N.
    """
    knobs: List[int] = field(default_factory=lambda: list(BEATSTEP_KNOBS))
    pads: List[int] = field(default_factory=lambda: list(BEATSTEP_PADS))
    big_knob: int = BEATSTEP_BIG_KNOB

    def knob_code(self, position: int) -> Optional[int]:
        if position == 0:
            return self.big_knob
        if 1 <= position <= len(self.knobs):
            return self.knobs[position - 1]
        return None

    def pad_code(self, position: int) -> Optional[int]:
        if 1 <= position <= len(self.pads):
            return self.pads[position - 1]
        return None


@dataclass(frozen=True)
class MidiBindingConfig:
    """
    One control binding from the midi config section

    Knob bindings (VALUE, SPEED, STATE) use `knob`, ACTION bindings use `pad`.
    ACTION targets are "configuration:<name>", "impulse:<name>" or "reset".
    """
    type: MidiControlType
    target: str
    knob: Optional[int] = None
    pad: Optional[int] = None
    sensitivity: float = 0.01
    factor: int = 1
    duration_ms: float = 1000.0

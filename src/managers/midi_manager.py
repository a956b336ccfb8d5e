"""
MIDI Manager - Processes the midi config section

    midi:
      port: "Arturia BeatStep"   # input port name pattern
      layout:              # optional, defaults to Arturia BeatStep
        knobs: [10, 74, ...]
        pads: [44, 45, ...]
        big_knob: 7
      bindings:
        - {type: VALUE, knob: 1, target: brightness, sensitivity: 0.01}
        - {type: STATE, knob: 0, target: hue_steps, factor: 1}
        - {type: ACTION, pad: 9, target: "configuration:warm"}
"""

from typing import List

from models.domain.midi import (
    BEATSTEP_BIG_KNOB, BEATSTEP_KNOBS, BEATSTEP_PADS, DEFAULT_PORT_PATTERN, MidiBindingConfig, MidiLayout
)
from models.enums import LogCategory, MidiControlType
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)


class MidiManager:
    def __init__(self, config_data: dict):
        section = config_data.get("midi") or {}
        self.enabled = bool(section.get("enabled", True))
        self.port = str(section.get("port", DEFAULT_PORT_PATTERN))
        self.layout = self._parse_layout(section.get("layout") or {})
        self.bindings: List[MidiBindingConfig] = self._parse_bindings(section.get("bindings") or [])

        log.info("MIDI bindings loaded", total=len(self.bindings), enabled=self.enabled)

    def _parse_layout(self, data: dict) -> MidiLayout:
        return MidiLayout(
            knobs=[int(c) for c in data.get("knobs", BEATSTEP_KNOBS)],
            pads=[int(c) for c in data.get("pads", BEATSTEP_PADS)],
            big_knob=int(data.get("big_knob", BEATSTEP_BIG_KNOB)),
        )

    def _parse_bindings(self, entries: list) -> List[MidiBindingConfig]:
        bindings = []
        for entry in entries:
            try:
                control_type = MidiControlType[str(entry.get("type", "")).upper()]
            except KeyError:
                log.warn("Unknown MIDI control type, skipped", type=entry.get("type"))
                continue

            if control_type == MidiControlType.ACTION and entry.get("pad") is None:
                log.warn("ACTION binding needs a pad, skipped", target=entry.get("target"))
                continue
            if control_type != MidiControlType.ACTION and entry.get("knob") is None:
                log.warn("Knob binding needs a knob, skipped", target=entry.get("target"))
                continue

            bindings.append(MidiBindingConfig(
                type=control_type,
                target=str(entry.get("target", "")),
                knob=entry.get("knob"),
                pad=entry.get("pad"),
                sensitivity=float(entry.get("sensitivity", 0.01)),
                factor=int(entry.get("factor", 1)),
                duration_ms=float(entry.get("duration_ms", 1000.0)),
            ))
        return bindings

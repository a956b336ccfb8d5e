from .midi_controller import (
    MidiController,
    MidiControl,
    ValueKnob,
    SpeedKnob,
    StateKnob,
    PadAction,
    factor_modulation,
)

__all__ = [
    'MidiController',
    'MidiControl',
    'ValueKnob',
    'SpeedKnob',
    'StateKnob',
    'PadAction',
    'factor_modulation'
]

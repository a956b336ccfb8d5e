"""
Factories for modifiers, impulses, sequencers and deferred actions

Action factories read their speed attribute when triggered, so a knob
bound to that attribute changes the duration of the next transition:
duration_ms = 1000 / max(0.001, speed).
"""

from typing import Callable, Iterable, Optional, Sequence, Union

from engine.indexed_state import IndexedStateModifier
from engine.modifiers import GroupValueModifier, Modifier, ValueModifier
from engine.state_sequencer import StateSequencer
from engine.temporal import make_immediate_pulse, make_pulse
from engine.timed_modifier import TimedModifier
from engine.transition_engine import TransitionEngine
from models.attribute import Attribute

MIN_SPEED = 0.001
DEFAULT_IMPULSE_MS = 1000.0


def speed_to_duration(speed: float) -> float:
    """Convert a speed in transitions per second to milliseconds"""
    return 1000.0 / max(MIN_SPEED, speed)


def make_value_modifier(attribute: Attribute, value: float) -> ValueModifier:
    return ValueModifier(attribute, value)


def make_state_value_modifier(attribute: Attribute, levels: Sequence[float]) -> IndexedStateModifier:
    """Levels must be ascending"""
    return IndexedStateModifier(attribute, levels)


def make_group_modifier(
    attributes: Sequence[Attribute],
    values: Union[float, Sequence[float]]
) -> GroupValueModifier:
    return GroupValueModifier(attributes, values)


def _as_modifier(target: Union[Attribute, Modifier], value: Optional[float]) -> Modifier:
    if isinstance(target, Modifier):
        return target
    if value is None:
        raise TypeError("An impulse on an attribute needs an aimed value")
    return ValueModifier(target, value)


def make_impulse(
    target: Union[Attribute, Modifier],
    value: Optional[float] = None,
    duration: float = DEFAULT_IMPULSE_MS
) -> TimedModifier:
    """Round trip excursion towards value (or the modifier's aim) and back"""
    return TimedModifier(_as_modifier(target, value), make_pulse(duration))


def make_immediate_impulse(
    target: Union[Attribute, Modifier],
    value: Optional[float] = None,
    duration: float = DEFAULT_IMPULSE_MS
) -> TimedModifier:
    """Jump to value (or the modifier's aim), then ease back"""
    return TimedModifier(_as_modifier(target, value), make_immediate_pulse(duration))


def make_state_sequencer(attribute: Attribute, levels: Sequence[float], name: str = "") -> StateSequencer:
    return StateSequencer(make_state_value_modifier(attribute, levels), name=name or attribute.name)


# === Deferred actions ===

def make_transition_action(
    engine: TransitionEngine,
    modifiers: Iterable[Modifier],
    speed_attribute: Attribute
) -> Callable[[], None]:
    modifiers = list(modifiers)

    def action():
        engine.add_modifiers(modifiers, speed_to_duration(speed_attribute.get()))

    return action


def make_impulse_action(
    engine: TransitionEngine,
    modifiers: Iterable[Modifier],
    speed_attribute: Attribute
) -> Callable[[], None]:
    modifiers = list(modifiers)

    def action():
        duration = speed_to_duration(speed_attribute.get())
        for modifier in modifiers:
            engine.add(make_impulse(modifier, duration=duration))

    return action


def make_immediate_impulse_action(
    engine: TransitionEngine,
    modifiers: Iterable[Modifier],
    speed_attribute: Attribute
) -> Callable[[], None]:
    modifiers = list(modifiers)

    def action():
        duration = speed_to_duration(speed_attribute.get())
        for modifier in modifiers:
            engine.add(make_immediate_impulse(modifier, duration=duration))

    return action

"""
MIDI Controller - knob and pad bindings

Subscribes to MIDI events and dispatches them to bound controls:

- ValueKnob: relative offsets accumulated between ticks, applied once per tick
- SpeedKnob: continuous drift of an attribute; turning accelerates or
  brakes it, the pad below the knob stops it
- StateKnob: steps an indexed state by factor * (value - 64)
- PadAction: fires a transition request on the pad's rising edge

Knob values are relative: 64 is no movement, above 64 turns right.
"""

import weakref
from typing import Awaitable, Callable, Dict, List, Optional

from models.attribute import Attribute
from models.domain.midi import MidiBindingConfig, MidiLayout
from models.enums import LogCategory, MidiControlType
from models.events import EventType, MidiKnobEvent, MidiPadEvent
from services.errors import InvalidActionError
from services.event_bus import EventBus
from services.transition_service import TransitionService
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.MIDI)

KNOB_CENTER = 64

Action = Callable[[], Awaitable[object]]


def factor_modulation(speed_factor: float, time_factor: float) -> float:
    """
    Speed multiplier for a knob turn

    speed_factor is 1.0 for no movement; the further from 1.0 and the
    slower the turn (small time_factor), the stronger the change.
    """
    temp = speed_factor - 1
    sign = 1 if temp > 0 else -1
    return 1 + sign * pow(sign * temp, time_factor)


class MidiControl:
    """Base control: every hook is a no-op"""

    async def turned(self, value: int, delta_time: float) -> None:
        pass

    async def button(self, pressed: bool) -> None:
        pass

    def apply_update(self) -> None:
        pass


class _AttributeControl(MidiControl):
    def __init__(self, attribute: Attribute, sensitivity: float):
        self._attribute_ref = weakref.ref(attribute)
        self.sensitivity = sensitivity

    @property
    def attribute(self) -> Optional[Attribute]:
        return self._attribute_ref()


class ValueKnob(_AttributeControl):
    def __init__(self, attribute: Attribute, sensitivity: float = 0.01):
        super().__init__(attribute, sensitivity)
        self.pending = 0.0
        self.needs_update = False

    async def turned(self, value: int, delta_time: float) -> None:
        self.pending += (value - KNOB_CENTER) * self.sensitivity
        self.needs_update = True

    def apply_update(self) -> None:
        if not self.needs_update:
            return
        attr = self.attribute
        if attr is None:
            log.warn("Value knob bound to a disposed attribute")
        else:
            attr.set(attr.get() + self.pending)
            self.pending = 0.0
        self.needs_update = False


class SpeedKnob(_AttributeControl):
    def __init__(self, attribute: Attribute, sensitivity: float = 0.01):
        super().__init__(attribute, sensitivity)
        self.speed = 0.0

    async def turned(self, value: int, delta_time: float) -> None:
        time_factor = delta_time * 20

        if self.speed == 0:
            sign = 1 if value > KNOB_CENTER else -1
            self.speed = sign * self.sensitivity
        elif self.speed > 0:
            self.speed *= factor_modulation(value / KNOB_CENTER, time_factor)
        else:
            self.speed *= factor_modulation((128 - value) / KNOB_CENTER, time_factor)

    def stop(self) -> None:
        self.speed = 0.0

    async def button(self, pressed: bool) -> None:
        self.stop()

    def apply_update(self) -> None:
        if self.speed == 0:
            return
        attr = self.attribute
        if attr is None:
            log.warn("Speed knob bound to a disposed attribute")
            return
        attr.set(attr.get() + self.speed)


class StateKnob(MidiControl):
    def __init__(self, service: TransitionService, state: str, factor: int = 1, duration_ms: float = 1000.0):
        self.service = service
        self.state = state
        self.factor = factor
        self.duration_ms = duration_ms

    async def turned(self, value: int, delta_time: float) -> None:
        delta = self.factor * (value - KNOB_CENTER)
        if delta == 0:
            return
        await self.service.step_state(self.state, delta, self.duration_ms)


class PadAction(MidiControl):
    def __init__(self, action: Action, name: str = ""):
        self.action = action
        self.name = name
        self.last_pressed = False

    async def button(self, pressed: bool) -> None:
        rising = pressed and not self.last_pressed
        self.last_pressed = pressed
        if rising:
            log.debug("Pad action", action=self.name)
            await self.action()


def make_action(service: TransitionService, target: str) -> Action:
    """
    Build the coroutine function behind a pad target

    Targets: "configuration:<name>", "impulse:<name>", "state:<name>:<delta>", "reset"

    Raises:
        InvalidActionError: Malformed target
    """
    kind, _, rest = target.partition(":")

    if kind == "reset" and not rest:
        return service.reset
    if kind == "configuration" and rest:
        return lambda: service.apply_configuration(rest)
    if kind == "impulse" and rest:
        return lambda: service.trigger_impulse(rest)
    if kind == "state" and rest:
        name, _, delta = rest.rpartition(":")
        try:
            step = int(delta)
        except ValueError:
            raise InvalidActionError(target)
        if name:
            return lambda: service.step_state(name, step)

    raise InvalidActionError(target)


class MidiController:
    """
    Dispatches MIDI events to bound controls

    Example:
        controller = MidiController(event_bus, transition_service, layout)
        controller.load_bindings(config.midi_manager.bindings)
        controller.subscribe()
    """

    def __init__(self, event_bus: EventBus, service: TransitionService, layout: Optional[MidiLayout] = None):
        self.event_bus = event_bus
        self.service = service
        self.layout = layout or MidiLayout()

        self.knobs: Dict[int, MidiControl] = {}
        self.pads: Dict[int, MidiControl] = {}
        self.pad_to_knob: Dict[int, int] = {}
        self._subscribed = False

    # === Binding ===

    def set_knob(self, position: int, control: MidiControl) -> None:
        """Bind a knob; position 0 is the big knob"""
        code = self.layout.knob_code(position)
        if code is None:
            log.warn("No knob at position", position=position)
            return
        self.knobs[code] = control

    def set_speed_knob(self, position: int, control: MidiControl) -> None:
        """Bind a knob whose pad (same position) forwards presses to it"""
        knob = self.layout.knob_code(position) if position >= 1 else None
        pad = self.layout.pad_code(position)
        if knob is None or pad is None:
            log.warn("No knob/pad pair at position", position=position)
            return
        self.knobs[knob] = control
        self.pad_to_knob[pad] = knob

    def set_pad(self, position: int, control: MidiControl) -> None:
        code = self.layout.pad_code(position)
        if code is None:
            log.warn("No pad at position", position=position)
            return
        self.pads[code] = control

    def clear(self) -> None:
        self.knobs.clear()
        self.pads.clear()
        self.pad_to_knob.clear()

    def load_bindings(self, bindings: List[MidiBindingConfig]) -> int:
        """
        Build controls from config bindings; invalid ones are warned about and skipped

        Returns:
            Number of bindings installed
        """
        installed = 0
        for binding in bindings:
            control = self._build_control(binding)
            if control is None:
                continue

            if binding.type == MidiControlType.ACTION:
                self.set_pad(binding.pad, control)
            elif binding.type == MidiControlType.SPEED:
                self.set_speed_knob(binding.knob, control)
            else:
                self.set_knob(binding.knob, control)
            installed += 1

        log.info("MIDI bindings installed", installed=installed, total=len(bindings))
        return installed

    def _build_control(self, binding: MidiBindingConfig) -> Optional[MidiControl]:
        if binding.type in (MidiControlType.VALUE, MidiControlType.SPEED):
            attribute = self.service.attribute_manager.get_attribute(binding.target)
            if attribute is None:
                log.warn("MIDI binding to unknown attribute, skipped", target=binding.target)
                return None
            if binding.type == MidiControlType.VALUE:
                return ValueKnob(attribute, binding.sensitivity)
            return SpeedKnob(attribute, binding.sensitivity)

        if binding.type == MidiControlType.STATE:
            if binding.target not in self.service.sequencers:
                log.warn("MIDI binding to unknown state, skipped", target=binding.target)
                return None
            return StateKnob(self.service, binding.target, binding.factor, binding.duration_ms)

        try:
            return PadAction(make_action(self.service, binding.target), name=binding.target)
        except InvalidActionError as e:
            log.warn("Invalid pad action, skipped", target=binding.target, error=e.message)
            return None

    # === Event handling ===

    def subscribe(self) -> None:
        if self._subscribed:
            return
        self.event_bus.subscribe(EventType.MIDI_KNOB, self._on_knob)
        self.event_bus.subscribe(EventType.MIDI_PAD, self._on_pad)
        self.service.add_pre_tick_hook(self.apply_updates)
        self._subscribed = True

    async def _on_knob(self, event: MidiKnobEvent) -> None:
        control = self.knobs.get(event.control)
        if control is not None:
            await control.turned(event.value, event.delta_time)

    async def _on_pad(self, event: MidiPadEvent) -> None:
        knob = self.pad_to_knob.get(event.control)
        if knob is not None and knob in self.knobs:
            await self.knobs[knob].button(event.pressed)

        control = self.pads.get(event.control)
        if control is not None:
            await control.button(event.pressed)

    def apply_updates(self) -> None:
        """Flush accumulated knob changes; runs as a pre-tick hook"""
        for control in self.knobs.values():
            control.apply_update()

"""
EventBus middleware

Each middleware takes an event and returns it (possibly replaced) or None
to drop it before any handler runs.
"""

from typing import Optional

from models.events import Event, EventType
from models.enums import LogCategory, LogLevel
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """Trace every event at DEBUG"""
    if log.is_enabled(LogLevel.DEBUG):
        source = event.source.name if event.source else "NONE"
        log.debug(f"{event.type.name} from {source}", **event.data)
    return event


def make_knob_deadzone_middleware(center: int = 64):
    """
    Drop knob events carrying no movement

    Relative knobs report `center` when not moving; such events would only
    reset speed knobs' modulation.
    """

    def knob_deadzone_middleware(event: Event) -> Optional[Event]:
        if event.type == EventType.MIDI_KNOB and getattr(event, "value", None) == center:
            return None
        return event

    return knob_deadzone_middleware

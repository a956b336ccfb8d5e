"""Transition service events"""

from dataclasses import dataclass
from typing import Optional

from models.enums import EventSource, TransitionKind
from models.events.base import Event
from models.events.types import EventType


@dataclass(init=False)
class TransitionRequestedEvent(Event):
    """Published after a transition request was registered with the engine"""
    kind: TransitionKind
    target: str

    def __init__(self, kind: TransitionKind, target: str, source: Optional[EventSource] = EventSource.TRANSITION_SERVICE):
        super().__init__(type=EventType.TRANSITION_REQUESTED, source=source)
        self.kind = kind
        self.target = target


@dataclass(init=False)
class EngineResetEvent(Event):
    """Published after every active transition was discarded"""
    discarded: int

    def __init__(self, discarded: int = 0):
        super().__init__(type=EventType.ENGINE_RESET, source=EventSource.TRANSITION_SERVICE)
        self.discarded = discarded

"""
Transition engine - temporals, modifiers and the orchestrator ticking them
"""

from .temporal import Temporal, FunctionTemporal, make_speed
from .modifiers import Modifier, AttributeModifier, ValueModifier, GroupValueModifier
from .indexed_state import IndexedStateModifier
from .timed_modifier import TimedModifier
from .transition_engine import TransitionEngine
from .state_sequencer import StateSequencer
from .tick_loop import TickLoop

__all__ = [
    "Temporal",
    "FunctionTemporal",
    "make_speed",
    "Modifier",
    "AttributeModifier",
    "ValueModifier",
    "GroupValueModifier",
    "IndexedStateModifier",
    "TimedModifier",
    "TransitionEngine",
    "StateSequencer",
    "TickLoop",
]

"""
State Sequencer - stepping an indexed state through the engine

Each step freezes the previous in-flight step to its aimed value (so it no
longer follows the moving index), then registers the shared indexed
modifier again on a fresh Temporal.
"""

from typing import Callable, Optional

from engine.indexed_state import IndexedStateModifier
from engine.temporal import make_speed, make_speed_temporal
from engine.timed_modifier import TimedModifier
from engine.transition_engine import TransitionEngine
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.STATE)


class StateSequencer:
    """
    Builds delta-step and goto-index transitions for one indexed state

    Attributes:
        modifier: The indexed state modifier shared by every step
        last_timed_modifier: Engine handle of the last step issued
    """

    def __init__(self, modifier: IndexedStateModifier, name: str = ""):
        self.modifier = modifier
        self.name = name
        self.last_timed_modifier: Optional[TimedModifier] = None

    def _freeze_last(self) -> None:
        last = self.last_timed_modifier
        if last is None:
            return
        last.mutate_to_value()
        if last.done:
            self.modifier.discard_last_index()

    def _register(self, engine: TransitionEngine, speed: float) -> Optional[TimedModifier]:
        self.last_timed_modifier = engine.add(TimedModifier(self.modifier, make_speed_temporal(speed)))
        return self.last_timed_modifier

    def apply_delta_speed(self, engine: TransitionEngine, delta: int, speed: float) -> Optional[TimedModifier]:
        self._freeze_last()
        self.modifier.update_index(delta)
        log.debug("State step", state=self.name, delta=delta, aimed_index=self.modifier.aimed_index)
        return self._register(engine, speed)

    def go_to_index_speed(self, engine: TransitionEngine, index: int, speed: float) -> Optional[TimedModifier]:
        self._freeze_last()
        self.modifier.set_aimed_index(self.modifier.index_close_to_current_index(index))
        log.debug("State goto", state=self.name, index=index, aimed_index=self.modifier.aimed_index)
        return self._register(engine, speed)

    def apply_delta(self, engine: TransitionEngine, delta: int, duration: float) -> Optional[TimedModifier]:
        return self.apply_delta_speed(engine, delta, make_speed(duration))

    def go_to_index(self, engine: TransitionEngine, index: int, duration: float) -> Optional[TimedModifier]:
        return self.go_to_index_speed(engine, index, make_speed(duration))

    def make_delta_transition(self, engine: TransitionEngine, delta: int, duration: float) -> Callable[[], None]:
        def action():
            self.apply_delta(engine, delta, duration)

        return action

    def make_index_transition(self, engine: TransitionEngine, index: int, duration: float) -> Callable[[], None]:
        def action():
            self.go_to_index(engine, index, duration)

        return action

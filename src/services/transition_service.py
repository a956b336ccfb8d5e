"""
Transition Service

Facade over the transition engine for the rest of the application: the
tick loop, the REST API and the MIDI controller all go through here.

Every engine mutation and every tick runs behind a single asyncio.Lock, so
an API request never interleaves with apply(). Events are published after
the lock is released.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional

from engine.factories import make_immediate_impulse, make_impulse, make_state_sequencer
from engine.modifiers import ValueModifier
from engine.state_sequencer import StateSequencer
from engine.transition_engine import TransitionEngine
from managers.attribute_manager import AttributeManager
from managers.transition_manager import TransitionManager
from models.attribute import Attribute
from models.enums import LogCategory, TransitionKind
from models.events import EngineResetEvent, TransitionRequestedEvent
from services.errors import TransitionTargetNotFoundError
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.TRANSITION)


class TransitionService:
    """
    Serialized access to the transition engine

    Example:
        service = TransitionService(config.attribute_manager, config.transition_manager, event_bus)

        await service.apply_configuration("warm")
        await service.step_state("hue_steps", +1)

        # From the tick loop, once per cycle
        await service.tick(elapsed_ms)
    """

    def __init__(
        self,
        attribute_manager: AttributeManager,
        transition_manager: TransitionManager,
        event_bus=None,
        engine: Optional[TransitionEngine] = None,
        min_duration_ms: float = 1.0
    ):
        """
        Args:
            attribute_manager: Owner of the live attributes
            transition_manager: Named states, configurations and impulses
            event_bus: Optional EventBus for TransitionRequested/EngineReset events
            engine: Engine instance (a new one by default)
            min_duration_ms: Floor applied to every requested duration
        """
        self.attribute_manager = attribute_manager
        self.transition_manager = transition_manager
        self.event_bus = event_bus
        self.engine = engine or TransitionEngine()
        self.min_duration_ms = min_duration_ms

        self._lock = asyncio.Lock()
        self._pre_tick_hooks: List[Callable[[], None]] = []

        self.sequencers: Dict[str, StateSequencer] = {}
        for name, state in transition_manager.states.items():
            attribute = attribute_manager.get_attribute(state.attribute)
            self.sequencers[name] = make_state_sequencer(attribute, state.levels, name=name)

        self.ticks = 0
        self.last_elapsed_ms = 0.0

        log.info(
            "TransitionService initialized",
            attributes=len(attribute_manager.attributes),
            states=len(self.sequencers),
            configurations=len(transition_manager.configurations),
            impulses=len(transition_manager.impulses)
        )

    # === Lookups ===

    def get_attribute(self, name: str) -> Attribute:
        attribute = self.attribute_manager.get_attribute(name)
        if attribute is None:
            raise TransitionTargetNotFoundError("attribute", name)
        return attribute

    def get_sequencer(self, name: str) -> StateSequencer:
        sequencer = self.sequencers.get(name)
        if sequencer is None:
            raise TransitionTargetNotFoundError("state", name)
        return sequencer

    def _duration(self, duration_ms: float) -> float:
        return max(self.min_duration_ms, duration_ms)

    async def _publish(self, event) -> None:
        if self.event_bus is not None:
            await self.event_bus.publish(event)

    # === Transition requests ===

    async def apply_configuration(self, name: str, duration_ms: Optional[float] = None) -> int:
        """
        Fade every target of a named configuration to its value

        Returns:
            Number of transitions registered
        """
        config = self.transition_manager.get_configuration(name)
        if config is None:
            raise TransitionTargetNotFoundError("configuration", name)

        duration = self._duration(config.duration_ms if duration_ms is None else duration_ms)
        modifiers = [
            ValueModifier(self.get_attribute(attr_name), value).set_persistence(config.persistent)
            for attr_name, value in config.targets.items()
        ]

        async with self._lock:
            handles = self.engine.add_modifiers(modifiers, duration)

        log.info("Configuration applied", name=name, duration_ms=duration, targets=len(handles))
        await self._publish(TransitionRequestedEvent(TransitionKind.FADE, name))
        return len(handles)

    async def trigger_impulse(self, name: str) -> int:
        impulse = self.transition_manager.get_impulse(name)
        if impulse is None:
            raise TransitionTargetNotFoundError("impulse", name)

        factory = make_immediate_impulse if impulse.immediate else make_impulse
        duration = self._duration(impulse.duration_ms)
        timed = [
            factory(self.get_attribute(attr_name), value, duration)
            for attr_name, value in impulse.targets.items()
        ]

        async with self._lock:
            handles = [h for h in (self.engine.add(t) for t in timed) if h is not None]

        kind = TransitionKind.IMMEDIATE_IMPULSE if impulse.immediate else TransitionKind.IMPULSE
        log.info("Impulse triggered", name=name, kind=kind.name, duration_ms=duration)
        await self._publish(TransitionRequestedEvent(kind, name))
        return len(handles)

    async def step_state(self, name: str, delta: int, duration_ms: Optional[float] = None) -> int:
        """
        Step a named state by delta levels

        Returns:
            The new aimed index
        """
        sequencer = self.get_sequencer(name)
        state = self.transition_manager.get_state(name)
        duration = self._duration(state.duration_ms if duration_ms is None else duration_ms)

        async with self._lock:
            sequencer.apply_delta(self.engine, delta, duration)
            aimed = sequencer.modifier.aimed_index

        log.info("State step", state=name, delta=delta, aimed_index=aimed)
        await self._publish(TransitionRequestedEvent(TransitionKind.STATE_DELTA, name))
        return aimed

    async def goto_state(self, name: str, index: int, duration_ms: Optional[float] = None) -> int:
        sequencer = self.get_sequencer(name)
        state = self.transition_manager.get_state(name)
        duration = self._duration(state.duration_ms if duration_ms is None else duration_ms)

        async with self._lock:
            sequencer.go_to_index(self.engine, index, duration)
            aimed = sequencer.modifier.aimed_index

        log.info("State goto", state=name, index=index, aimed_index=aimed)
        await self._publish(TransitionRequestedEvent(TransitionKind.STATE_GOTO, name))
        return aimed

    async def transition_attribute(
        self,
        name: str,
        value: float,
        duration_ms: float = 1000.0,
        persistent: bool = False
    ) -> None:
        modifier = ValueModifier(self.get_attribute(name), value).set_persistence(persistent)
        duration = self._duration(duration_ms)

        async with self._lock:
            self.engine.add_modifiers([modifier], duration)

        log.info("Attribute transition", attribute=name, value=value, duration_ms=duration, persistent=persistent)
        await self._publish(TransitionRequestedEvent(TransitionKind.FADE, name))

    async def set_attribute(self, name: str, value: float) -> float:
        """
        Set an attribute directly, without transition

        A transition still running on the attribute keeps mixing over it.

        Returns:
            The value after bounds enforcement
        """
        attribute = self.get_attribute(name)
        async with self._lock:
            attribute.set(value)
            result = attribute.get()

        log.debug("Attribute set", attribute=name, value=result)
        await self._publish(TransitionRequestedEvent(TransitionKind.DIRECT, name))
        return result

    async def reset(self) -> int:
        """Discard every active transition; attributes keep their present values"""
        async with self._lock:
            discarded = self.engine.active_count()
            self.engine.reset()

        await self._publish(EngineResetEvent(discarded))
        return discarded

    async def run_locked(self, fn: Callable[[], Any]) -> Any:
        """Run fn with exclusive access to the engine"""
        async with self._lock:
            return fn()

    # === Tick ===

    def add_pre_tick_hook(self, hook: Callable[[], None]) -> None:
        """Register a callable run inside the lock before each apply"""
        self._pre_tick_hooks.append(hook)

    async def tick(self, elapsed_ms: float) -> None:
        async with self._lock:
            for hook in self._pre_tick_hooks:
                try:
                    hook()
                except Exception as e:
                    log.error("Pre-tick hook failed", hook=getattr(hook, "__name__", repr(hook)), exception=e)

            self.engine.apply(elapsed_ms)
            self.ticks += 1
            self.last_elapsed_ms = elapsed_ms

    # === Snapshots ===

    def attribute_snapshot(self, name: str) -> Dict[str, Any]:
        attribute = self.get_attribute(name)
        config = self.attribute_manager.get_config(name)
        return {
            "name": name,
            "id": attribute.id,
            "value": attribute.get(),
            "min": attribute.min,
            "max": attribute.max,
            "periodic": attribute.is_periodic(),
            "unit": attribute.unit,
            "description": config.description if config else "",
            "active_transitions": len(self.engine.sequence(attribute.id)),
        }

    def list_attributes(self) -> List[Dict[str, Any]]:
        return [self.attribute_snapshot(name) for name in self.attribute_manager.names()]

    def state_snapshot(self, name: str) -> Dict[str, Any]:
        sequencer = self.get_sequencer(name)
        state = self.transition_manager.get_state(name)
        modifier = sequencer.modifier
        return {
            "name": name,
            "attribute": state.attribute,
            "levels": list(modifier.levels),
            "current_index": modifier.current_index(),
            "aimed_index": modifier.aimed_index,
            "aimed_value": modifier.aimed_value(),
            "duration_ms": state.duration_ms,
        }

    def list_states(self) -> List[Dict[str, Any]]:
        return [self.state_snapshot(name) for name in self.sequencers]

    def list_configurations(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": c.name,
                "targets": dict(c.targets),
                "duration_ms": c.duration_ms,
                "persistent": c.persistent,
                "description": c.description,
            }
            for c in self.transition_manager.configurations.values()
        ]

    def list_impulses(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": i.name,
                "targets": dict(i.targets),
                "duration_ms": i.duration_ms,
                "immediate": i.immediate,
                "description": i.description,
            }
            for i in self.transition_manager.impulses.values()
        ]

    def engine_snapshot(self) -> Dict[str, Any]:
        managed = []
        for attr_id in self.engine.managed_ids():
            attribute = self.attribute_manager.get_by_id(attr_id)
            managed.append(attribute.name if attribute is not None else str(attr_id))
        return {
            "managed_attributes": managed,
            "active_count": self.engine.active_count(),
            "ticks": self.ticks,
            "last_elapsed_ms": self.last_elapsed_ms,
        }

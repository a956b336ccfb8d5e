"""
Transition Engine - owns and ticks every active transition

Per attribute id the engine keeps an ordered sequence of timed modifiers;
insertion order is composition order. Each apply() ticks every distinct
entry exactly once (a multi-attribute entry sits in several sequences but
is ticked once and mixed only into the attributes whose sequences still
hold it), then retires what no longer matters:

- finished pulses are dropped immediately
- the last finished non-pulse entry becomes the baseline, everything
  older is dropped
- a sequence reduced to one finished, non-persistent entry is cleared and
  the attribute returns to unmanaged

The engine does no locking; the host serializes add/apply/reset (see
services.transition_service).
"""

from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from engine.modifiers import Modifier
from engine.temporal import make_duration_temporal
from engine.timed_modifier import TimedModifier
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.ENGINE)


class TransitionEngine:
    """
    Transition configuration and orchestrator

    Example:
        engine = TransitionEngine()
        engine.add(TimedModifier(ValueModifier(brightness, 1.0), make_duration_temporal(500)))

        # Once per host cycle
        engine.apply(elapsed_ms)
    """

    def __init__(self):
        self._sequences: Dict[int, List[TimedModifier]] = {}
        # Distinct entries in first-insertion order; pruned against the sequences each tick
        self._tracked: List[TimedModifier] = []
        self._update_required: Dict[int, bool] = {}

    # === Mutation ===

    def add(self, timed: TimedModifier) -> Optional[TimedModifier]:
        """
        Register a copy of timed and return the registered handle

        The first entry on an idle single-target attribute is preceded by a
        baseline entry frozen at the attribute's present value.

        Returns:
            The inserted clone, or None when the modifier targets nothing
        """
        ids = list(dict.fromkeys(timed.target_ids()))
        if not ids:
            log.debug("Transition without targets ignored", modifier=type(timed.modifier).__name__)
            return None

        for attr_id in ids:
            self._sequences.setdefault(attr_id, [])

        if len(ids) == 1 and not self._sequences[ids[0]]:
            baseline = timed.equivalent_static()
            self._sequences[ids[0]].append(baseline)
            self._tracked.append(baseline)

        inserted = timed.clone()
        for attr_id in ids:
            self._sequences[attr_id].append(inserted)
            self._update_required[attr_id] = True
        self._tracked.append(inserted)

        log.debug(
            "Transition added",
            targets=ids,
            modifier=type(timed.modifier).__name__,
            pulse=timed.is_pulse()
        )
        return inserted

    def add_modifiers(self, modifiers: Iterable[Modifier], duration: float) -> List[TimedModifier]:
        """Add each modifier on its own linear Temporal of the given duration"""
        handles = []
        for modifier in modifiers:
            handle = self.add(TimedModifier(modifier, make_duration_temporal(duration)))
            if handle is not None:
                handles.append(handle)
        return handles

    def reset(self) -> None:
        """Discard every active transition immediately"""
        count = self.active_count()
        self._sequences.clear()
        self._tracked.clear()
        self._update_required.clear()
        log.info("Engine reset", discarded=count)

    def notify_required_update(self, attr_id: int) -> None:
        self._update_required[attr_id] = True

    def needs_update(self, attr_id: int) -> bool:
        return self._update_required.get(attr_id, False)

    # === Tick ===

    def apply(self, elapsed: float) -> None:
        """Advance and mix every active entry, then retire finished ones"""
        holders: Dict[int, Set[int]] = {}
        for attr_id, sequence in self._sequences.items():
            for tm in sequence:
                holders.setdefault(id(tm), set()).add(attr_id)
        self._tracked = [tm for tm in self._tracked if id(tm) in holders]

        # A shared entry retired from one attribute keeps driving only the others
        for timed in self._tracked:
            timed.update(elapsed, holders[id(timed)])

        for attr_id in list(self._sequences):
            sequence = self._retire(self._sequences[attr_id])
            if sequence:
                self._sequences[attr_id] = sequence
            else:
                del self._sequences[attr_id]
                log.debug("Attribute released", attr_id=attr_id)
            self._update_required[attr_id] = False

    @staticmethod
    def _retire(sequence: List[TimedModifier]) -> List[TimedModifier]:
        sequence = [tm for tm in sequence if not (tm.done and tm.is_pulse())]

        split = 0
        for i, timed in enumerate(sequence):
            if timed.done:
                split = i
        sequence = sequence[split:]

        if len(sequence) == 1 and sequence[0].done and not sequence[0].is_persistent():
            return []
        return sequence

    # === Introspection ===

    def sequence(self, attr_id: int) -> Tuple[TimedModifier, ...]:
        return tuple(self._sequences.get(attr_id, ()))

    def managed_ids(self) -> List[int]:
        return list(self._sequences)

    def active_count(self) -> int:
        """Number of distinct entries held by at least one sequence"""
        return len({id(tm) for sequence in self._sequences.values() for tm in sequence})

    # === Deferred triggers ===

    def make_transition_action(self, modifiers: Iterable[Modifier], duration: float) -> Callable[[], None]:
        modifiers = list(modifiers)

        def action():
            self.add_modifiers(modifiers, duration)

        return action

    def make_add_action(self, timed: TimedModifier) -> Callable[[], None]:
        def action():
            self.add(timed)

        return action

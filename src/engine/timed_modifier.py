"""
TimedModifier - a modifier paired with the Temporal driving it
"""

from typing import Collection, List, Optional

from engine.modifiers import Modifier
from engine.temporal import Temporal


class TimedModifier:
    """
    One active transition entry

    update() advances the Temporal, then mixes the modifier at the
    resulting weight. Clones copy the Temporal and share the modifier.
    """

    def __init__(self, modifier: Modifier, temporal: Temporal):
        self.modifier = modifier
        self.temporal = temporal

    def update(self, elapsed: float, only: Optional[Collection[int]] = None) -> None:
        """Advance, then mix into the given target ids (all targets when None)"""
        self.temporal.update(elapsed)
        self.modifier.mix(self.temporal.weight(), only)

    def clone(self) -> "TimedModifier":
        return TimedModifier(self.modifier, self.temporal.clone())

    def equivalent_static(self) -> "TimedModifier":
        """Entry holding the attribute at its present value, on a linear Temporal"""
        return TimedModifier(self.modifier.freeze_to_current(), self.temporal.clone_linear())

    def equivalent_value(self) -> "TimedModifier":
        """Entry aiming at the current target, detached from later aim changes"""
        return TimedModifier(self.modifier.freeze_to_aimed(), self.temporal.clone())

    def mutate_to_static(self) -> None:
        """Freeze in place to the present value, keeping position and Temporal"""
        self.modifier = self.modifier.freeze_to_current()

    def mutate_to_value(self) -> None:
        """Freeze in place to the aimed value, keeping position and Temporal"""
        self.modifier = self.modifier.freeze_to_aimed()

    # === State ===

    @property
    def done(self) -> bool:
        return self.temporal.done

    def is_pulse(self) -> bool:
        return self.temporal.is_pulse()

    def is_persistent(self) -> bool:
        return self.modifier.is_persistent()

    def is_dynamic(self) -> bool:
        return self.modifier.is_dynamic()

    def target_ids(self) -> List[int]:
        return self.modifier.target_ids()

    def __repr__(self):
        return f"TimedModifier({self.modifier!r}, {self.temporal!r})"

"""
Indexed state modifier

Quantizes an attribute onto an ascending list of levels. Indices run from
0 to N-1 over the list; on a periodic attribute they continue past both
ends, index k*N + j standing for levels[j] + k*period.

The aimed index can be moved relatively (update_index) or absolutely
(set_aimed_index). Relative steps always move the aim in the requested
direction with respect to the live value, even mid-transition.
"""

import math
from typing import List, Optional, Sequence

from engine.modifiers import AttributeModifier
from models.attribute import Attribute

LEVEL_TOLERANCE = 1e-8


class IndexedStateModifier(AttributeModifier):
    """
    Modifier aiming at one of a fixed set of levels

    Attributes:
        levels: Ascending level values
        aimed_index: Index of the level currently aimed at
    """

    def __init__(self, attribute: Optional[Attribute], levels: Sequence[float]):
        super().__init__(attribute)
        self.levels: List[float] = list(levels)
        self.aimed_index = 0
        self._discard_last_index = True

    def is_dynamic(self) -> bool:
        return True

    # === Helpers ===

    def _current_value(self) -> float:
        attr = self.attribute
        return attr.get() if attr is not None else 0.0

    def _period(self) -> float:
        """Period of the attribute, 0.0 when it is not periodic"""
        attr = self.attribute
        if attr is None or not attr.is_periodic():
            return 0.0
        return attr.period()

    # === Aim ===

    def aimed_value(self) -> float:
        if not self.levels:
            return self._current_value()
        return self.value_at_index(self.aimed_index)

    def set_aimed_index(self, index: int) -> None:
        self.aimed_index = index
        self._discard_last_index = False

    def discard_last_index(self) -> None:
        """Make the next relative step start from the live value"""
        self._discard_last_index = True

    def reset_index(self) -> None:
        """Aim at the level closest to the live value"""
        self.aimed_index = self.current_index()
        self._discard_last_index = False

    def current_index(self) -> int:
        return self.closest_index(self._current_value())

    def index_delta(self) -> int:
        return self.aimed_index - self.current_index()

    # === Index arithmetic ===

    def value_at_index(self, index: int) -> float:
        n = len(self.levels)
        if n == 0:
            return self._current_value()
        period = self._period()
        if period > 0:
            steps, j = divmod(index, n)
            return self.levels[j] + steps * period
        return self.levels[min(max(index, 0), n - 1)]

    def closest_modulo_index(self, value: float) -> int:
        """Index in [0, N-1] of the level closest to value"""
        period = self._period()

        def distance(level: float) -> float:
            if period > 0:
                modulo = abs(math.fmod(level - value, period))
                return min(modulo, period - modulo)
            return abs(level - value)

        closest, min_distance = 0, None
        for i, level in enumerate(self.levels):
            d = distance(level)
            if min_distance is None or d < min_distance:
                closest, min_distance = i, d
        return closest

    def closest_index(self, value: float) -> int:
        """Unbounded index of the level instance closest to value"""
        j = self.closest_modulo_index(value)
        period = self._period()
        if period > 0 and self.levels:
            # Rounded, not floored: 350 on 0/90/180/270 maps to 4, not 0, so steps stay monotonic at the wrap
            k = round((value - self.levels[j]) / period)
            return k * len(self.levels) + j
        return j

    def index_close_to_current_index(self, index: int) -> int:
        """
        Index equivalent to index (modulo N) nearest to the current index

        Returns index unchanged for non-periodic attributes.
        """
        n = len(self.levels)
        if self._period() <= 0 or n == 0:
            return index
        current = self.current_index()
        delta = int(math.fmod(index - current, n))
        if delta > 0:
            final_delta = delta if delta < n - delta else -(n - delta)
        else:
            final_delta = delta if -delta < n + delta else n + delta
        return current + final_delta

    def update_index(self, delta: int) -> None:
        """
        Move the aimed index by delta

        Continues from the previous aim when it lies in the same direction
        as delta relative to the live value; otherwise re-anchors on the
        level closest to the live value, so the new aim is always strictly
        on the delta side of the live value.
        """
        value = self._current_value()
        if not self._discard_last_index and (self.aimed_value() - value) * delta >= 0:
            self.aimed_index += delta
        else:
            index = self.closest_index(value)
            offset = value - self.value_at_index(index)
            if offset > LEVEL_TOLERANCE:
                self.aimed_index = index + delta if delta > 0 else index + delta + 1
            elif offset < -LEVEL_TOLERANCE:
                self.aimed_index = index + delta - 1 if delta > 0 else index + delta
            else:
                self.aimed_index = index + delta

        self._discard_last_index = False

        if self._period() <= 0:
            self.aimed_index = max(0, min(self.aimed_index, len(self.levels) - 1))

    def __repr__(self):
        return f"IndexedStateModifier(levels={self.levels}, aimed_index={self.aimed_index})"

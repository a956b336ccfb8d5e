"""
Temporal - normalized progress of a transition

A Temporal advances from 0.0 to 1.0 at a fixed speed (normalized units per
millisecond) and exposes the weight a modifier is mixed with. The default
weight is the progress itself; FunctionTemporal maps progress through a
custom curve (see engine.easing).
"""

from typing import Callable, Optional

from engine.easing import spline, half_spline

MIN_DURATION_MS = 1.0


def make_speed(duration: float) -> float:
    """Convert a duration to a speed, flooring non-positive durations"""
    return 1.0 / max(MIN_DURATION_MS, duration)


class Temporal:
    """
    Linear progress tracker

    Attributes:
        normalized_time: Progress (0.0 = start, 1.0 = finished)
        speed: Progress gained per unit of elapsed time
        done: True once normalized_time reached 1.0
    """

    def __init__(self, speed: float = 0.0, normalized_time: float = 0.0):
        self.normalized_time = normalized_time
        self.speed = speed
        self.done = False

    def update(self, elapsed: float) -> None:
        self.normalized_time += self.speed * elapsed
        if self.normalized_time >= 1.0:
            self.normalized_time = 1.0
            self.done = True

    def reset(self, normalized_time: float = 0.0, speed: Optional[float] = None) -> None:
        """Reinitialize progress for reuse"""
        self.normalized_time = normalized_time
        if speed is not None:
            self.speed = speed
        self.done = False

    def weight(self) -> float:
        return self.normalized_time

    def is_pulse(self) -> bool:
        return False

    def clone(self) -> "Temporal":
        return self._copy_state(Temporal(self.speed))

    def clone_linear(self) -> "Temporal":
        """Copy progress and speed, dropping any custom weight curve"""
        return self._copy_state(Temporal(self.speed))

    def _copy_state(self, other: "Temporal") -> "Temporal":
        other.normalized_time = self.normalized_time
        other.done = self.done
        return other

    def __repr__(self):
        return f"{type(self).__name__}(t={self.normalized_time:.3f}, speed={self.speed:g}, done={self.done})"


class FunctionTemporal(Temporal):
    """
    Temporal whose weight is a function of normalized time

    A curve that does not end at 1.0 makes this Temporal a pulse: once
    finished, its modifier no longer contributes anything.
    """

    def __init__(
        self,
        weight_fn: Callable[[float], float],
        speed: float = 0.0,
        normalized_time: float = 0.0
    ):
        super().__init__(speed, normalized_time)
        self.weight_fn = weight_fn

    def weight(self) -> float:
        return self.weight_fn(self.normalized_time)

    def is_pulse(self) -> bool:
        return self.weight_fn(1.0) < 0.999

    def clone(self) -> "Temporal":
        return self._copy_state(FunctionTemporal(self.weight_fn, self.speed))


# === Factories ===

def make_speed_temporal(speed: float) -> Temporal:
    return Temporal(speed)


def make_duration_temporal(duration: float) -> Temporal:
    return Temporal(make_speed(duration))


def make_temporal(duration: float, weight_fn: Callable[[float], float]) -> FunctionTemporal:
    return FunctionTemporal(weight_fn, make_speed(duration))


def make_pulse(duration: float) -> FunctionTemporal:
    """Round trip: rises to the aimed value at half time, returns by the end"""
    return make_temporal(duration, spline)


def make_immediate_pulse(duration: float) -> FunctionTemporal:
    """Starts at the aimed value and eases back"""
    return make_temporal(duration, half_spline)

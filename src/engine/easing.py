"""
Weight curves

Functions mapping normalized time (0.0-1.0) to a modifier weight. Curves
ending at 1.0 settle on the aimed value; curves ending below 1.0 are pulses
and bring the attribute back to wherever the previous entries left it.
"""

from typing import Callable, Dict


def spline(y: float) -> float:
    """
    Bell-shaped quadratic spline, peak 1.0 at y=0.5, back to 0.0 at y=1.0

    Args:
        y: Normalized time (0.0 to 1.0)

    Returns:
        Weight (0.0 to 1.0)
    """
    x = 3.0 * y
    if 0.0 < x <= 1.0:
        output = x * x
    elif 1.0 < x <= 2.0:
        output = x * (6.0 - 2.0 * x) - 3.0
    elif 2.0 < x <= 3.0:
        output = x * (x - 6.0) + 9.0
    else:
        output = 0.0
    return output * 2.0 / 3.0


def half_spline(y: float) -> float:
    """Second half of the spline: starts at the peak, used for immediate impulses"""
    return spline(y + 0.5)


# === Ease curves ===

def ease_linear(t: float) -> float:
    """Linear easing (constant speed)"""
    return t


def ease_in_quad(t: float) -> float:
    """Quadratic ease-in (slow start → fast end)"""
    return t * t


def ease_out_quad(t: float) -> float:
    """Quadratic ease-out (fast start → slow end)"""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease-in-out (slow start → fast middle → slow end)"""
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


def ease_in_cubic(t: float) -> float:
    """Cubic ease-in (very slow start)"""
    return t * t * t


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out (very slow end)"""
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    return 4 * t * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


EASINGS: Dict[str, Callable[[float], float]] = {
    "linear": ease_linear,
    "in_quad": ease_in_quad,
    "out_quad": ease_out_quad,
    "in_out_quad": ease_in_out_quad,
    "in_cubic": ease_in_cubic,
    "out_cubic": ease_out_cubic,
    "in_out_cubic": ease_in_out_cubic,
    "spline": spline,
    "half_spline": half_spline,
}


def get_easing(name: str) -> Callable[[float], float]:
    """
    Look up a weight curve by name

    Raises:
        KeyError: Unknown curve name
    """
    try:
        return EASINGS[name]
    except KeyError:
        raise KeyError(f"Unknown easing '{name}', expected one of: {', '.join(EASINGS)}")

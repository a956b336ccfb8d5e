import pytest

from models.attribute import ValueAttribute


@pytest.fixture
def level():
    """Bounded, non-periodic attribute at 0.0 in [0, 10]"""
    return ValueAttribute(0.0, name="level", min_value=0.0, max_value=10.0)


@pytest.fixture
def hue():
    """Periodic attribute over [0, 360] without clamping"""
    return ValueAttribute(
        0.0, name="hue", min_value=0.0, max_value=360.0, periodic=True, enforce_extrema=False
    )


@pytest.fixture
def config_data():
    return {
        "attributes": {
            "brightness": {"default": 0.5, "min": 0.0, "max": 1.0},
            "hue": {"default": 0.0, "min": 0.0, "max": 360.0, "periodic": True, "enforce_extrema": False},
            "temperature": {"default": 4000.0, "min": 1800.0, "max": 6500.0, "unit": "K"},
        },
        "states": {
            "hue_steps": {"attribute": "hue", "levels": [0, 90, 180, 270], "duration_ms": 1000},
            "brightness_levels": {"attribute": "brightness", "levels": [0.0, 0.25, 0.5, 0.75, 1.0], "duration_ms": 500},
        },
        "configurations": {
            "warm": {"targets": {"temperature": 2700, "brightness": 0.8}, "duration_ms": 1000},
            "hold": {"targets": {"brightness": 1.0}, "duration_ms": 100, "persistent": True},
        },
        "impulses": {
            "flash": {"targets": {"brightness": 1.0}, "duration_ms": 1000},
            "kick": {"targets": {"hue": 90}, "duration_ms": 1000, "immediate": True},
        },
    }

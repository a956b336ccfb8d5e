import pytest

from engine.indexed_state import IndexedStateModifier
from models.attribute import ValueAttribute

HUE_LEVELS = [0.0, 90.0, 180.0, 270.0]
BRIGHTNESS_LEVELS = [0.0, 0.25, 0.5, 0.75, 1.0]


@pytest.fixture
def brightness():
    return ValueAttribute(0.0, min_value=0.0, max_value=1.0)


def test_value_at_index_periodic(hue):
    state = IndexedStateModifier(hue, HUE_LEVELS)
    assert state.value_at_index(0) == 0.0
    assert state.value_at_index(3) == 270.0
    assert state.value_at_index(5) == 450.0
    assert state.value_at_index(-1) == -90.0
    assert state.value_at_index(-4) == -360.0


def test_value_at_index_clamps_when_not_periodic(brightness):
    state = IndexedStateModifier(brightness, BRIGHTNESS_LEVELS)
    assert state.value_at_index(10) == 1.0
    assert state.value_at_index(-3) == 0.0


def test_closest_index_periodic(hue):
    state = IndexedStateModifier(hue, HUE_LEVELS)
    assert state.closest_modulo_index(350.0) == 0
    assert state.closest_index(350.0) == 4
    assert state.closest_index(-100.0) == -1
    assert state.closest_index(100.0) == 1
    assert state.closest_index(730.0) == 8


IRREGULAR_LEVELS = [0.0, 0.12, 0.3, 0.45, 0.6, 0.91]


@pytest.mark.parametrize("k", range(-10, 10))
@pytest.mark.parametrize("j", range(len(IRREGULAR_LEVELS)))
def test_irregular_levels_are_periodic(j, k):
    cycle = ValueAttribute(0.0, min_value=0.0, max_value=1.0, periodic=True, enforce_extrema=False)
    state = IndexedStateModifier(cycle, IRREGULAR_LEVELS)
    index = len(IRREGULAR_LEVELS) * k + j

    assert state.closest_index(IRREGULAR_LEVELS[j] + k) == index
    assert state.value_at_index(index) == pytest.approx(IRREGULAR_LEVELS[j] + k)


def test_empty_levels_aim_at_current(brightness):
    brightness.set(0.4)
    state = IndexedStateModifier(brightness, [])
    assert state.aimed_value() == 0.4
    assert state.value_at_index(3) == 0.4


def test_step_past_last_level_continues_periodically(hue):
    hue.set(270.0)
    state = IndexedStateModifier(hue, HUE_LEVELS)
    state.update_index(1)
    assert state.aimed_index == 4
    assert state.aimed_value() == 360.0


def test_step_between_levels(hue):
    hue.set(100.0)
    up = IndexedStateModifier(hue, HUE_LEVELS)
    up.update_index(1)
    assert up.aimed_value() == 180.0

    down = IndexedStateModifier(hue, HUE_LEVELS)
    down.update_index(-1)
    assert down.aimed_value() == 90.0

    hue.set(80.0)
    up = IndexedStateModifier(hue, HUE_LEVELS)
    up.update_index(1)
    assert up.aimed_value() == 90.0


def test_consecutive_steps_accumulate(hue):
    state = IndexedStateModifier(hue, HUE_LEVELS)
    state.update_index(1)
    state.update_index(1)
    assert state.aimed_index == 2

    # Reversing re-anchors on the live value
    state.update_index(-1)
    assert state.aimed_index == -1
    assert state.aimed_value() == -90.0


def test_non_periodic_steps_clamp(brightness):
    brightness.set(1.0)
    state = IndexedStateModifier(brightness, BRIGHTNESS_LEVELS)
    state.update_index(3)
    assert state.aimed_index == 4

    state.discard_last_index()
    brightness.set(0.0)
    state.update_index(-2)
    assert state.aimed_index == 0


@pytest.mark.parametrize("delta", [1, 2, -1, -2])
def test_periodic_step_always_moves_in_delta_direction(hue, delta):
    for value in range(-400, 800, 7):
        hue.set(float(value))
        state = IndexedStateModifier(hue, HUE_LEVELS)
        state.update_index(delta)
        assert (state.aimed_value() - value) * delta > 0, value


@pytest.mark.parametrize("delta", [1, -1])
def test_bounded_step_always_moves_in_delta_direction(brightness, delta):
    for step in range(1, 100):
        value = step / 100.0
        brightness.set(value)
        state = IndexedStateModifier(brightness, BRIGHTNESS_LEVELS)
        state.update_index(delta)
        assert (state.aimed_value() - value) * delta > 0, value


def test_index_close_to_current_index(hue):
    state = IndexedStateModifier(hue, HUE_LEVELS)
    assert state.index_close_to_current_index(3) == -1
    assert state.index_close_to_current_index(1) == 1

    hue.set(360.0)
    assert state.current_index() == 4
    assert state.index_close_to_current_index(1) == 5


def test_index_close_to_current_index_non_periodic(brightness):
    state = IndexedStateModifier(brightness, BRIGHTNESS_LEVELS)
    assert state.index_close_to_current_index(3) == 3


def test_set_aimed_index_and_delta(brightness):
    brightness.set(0.25)
    state = IndexedStateModifier(brightness, BRIGHTNESS_LEVELS)
    state.set_aimed_index(3)
    assert state.aimed_value() == 0.75
    assert state.index_delta() == 2

    state.reset_index()
    assert state.aimed_index == 1
    assert state.is_dynamic()

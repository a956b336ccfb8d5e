import gc

import pytest

from engine.factories import make_immediate_impulse, make_impulse
from engine.modifiers import GroupValueModifier, ValueModifier
from engine.temporal import make_duration_temporal
from engine.timed_modifier import TimedModifier
from engine.transition_engine import TransitionEngine
from models.attribute import ValueAttribute


@pytest.fixture
def engine():
    return TransitionEngine()


def fade(attribute, value, duration=1000.0):
    return TimedModifier(ValueModifier(attribute, value), make_duration_temporal(duration))


def test_linear_transition_from_fresh_start(engine, level):
    engine.add(fade(level, 10.0))

    engine.apply(250)
    assert level.get() == pytest.approx(2.5)


def test_transition_completes_and_releases_attribute(engine, level):
    engine.add(fade(level, 10.0))

    engine.apply(500)
    assert level.get() == pytest.approx(5.0)
    engine.apply(500)
    assert level.get() == 10.0

    assert engine.managed_ids() == []
    assert engine.active_count() == 0


def test_first_add_inserts_baseline(engine, level):
    level.set(3.0)
    handle = engine.add(fade(level, 10.0))

    sequence = engine.sequence(level.id)
    assert len(sequence) == 2
    assert sequence[0].modifier.aimed_value() == 3.0
    assert sequence[1] is handle
    assert engine.active_count() == 2
    assert engine.needs_update(level.id)


def test_add_registers_a_copy(engine, level):
    timed = fade(level, 10.0)
    handle = engine.add(timed)
    assert handle is not timed
    assert handle.modifier is timed.modifier

    engine.apply(1000)
    assert not timed.done


def test_persistent_entry_keeps_ownership(engine, level):
    modifier = ValueModifier(level, 10.0).set_persistence(True)
    engine.add_modifiers([modifier], 100)

    engine.apply(100)
    assert level.get() == 10.0
    assert engine.managed_ids() == [level.id]

    level.set(3.0)
    engine.apply(16)
    assert level.get() == 10.0


def test_impulse_round_trip(engine, level):
    level.set(2.0)
    engine.add(make_impulse(level, 10.0, 1000))

    engine.apply(500)
    assert level.get() == pytest.approx(10.0)
    engine.apply(500)
    assert level.get() == pytest.approx(2.0)
    assert engine.managed_ids() == []


def test_impulse_peak_from_fresh_start(engine, level):
    engine.add(make_impulse(level, 8.0, 400))
    engine.apply(200)
    assert level.get() == pytest.approx(8.0)


def test_immediate_impulse_starts_at_peak(engine, level):
    engine.add(make_immediate_impulse(level, 6.0, 1000))
    engine.apply(0)
    assert level.get() == pytest.approx(6.0)

    engine.apply(1000)
    assert level.get() == pytest.approx(0.0)


def test_second_transition_composes_over_first(engine, level):
    engine.add(fade(level, 10.0))
    engine.apply(500)
    assert level.get() == pytest.approx(5.0)

    engine.add(fade(level, 0.0))
    assert len(engine.sequence(level.id)) == 3

    engine.apply(500)
    # First finished at 10, second half way back to 0
    assert level.get() == pytest.approx(5.0)
    assert len(engine.sequence(level.id)) == 2

    engine.apply(500)
    assert level.get() == pytest.approx(0.0)
    assert engine.managed_ids() == []


def test_group_modifier_is_ticked_once(engine, level):
    other = ValueAttribute(0.0, min_value=0.0, max_value=20.0)
    handle = engine.add(TimedModifier(GroupValueModifier([level, other], [10.0, 20.0]), make_duration_temporal(1000)))

    assert engine.sequence(level.id) == (handle,)
    assert engine.sequence(other.id) == (handle,)
    assert engine.active_count() == 1

    engine.apply(500)
    assert handle.temporal.normalized_time == pytest.approx(0.5)
    assert level.get() == pytest.approx(5.0)
    assert other.get() == pytest.approx(10.0)

    engine.apply(500)
    assert engine.managed_ids() == []


def test_duplicate_targets_are_deduplicated(engine, level):
    group = GroupValueModifier([level, level], [4.0, 4.0])
    handle = engine.add(TimedModifier(group, make_duration_temporal(100)))

    # Single target: baseline plus the entry
    assert engine.sequence(level.id)[-1] is handle
    assert len(engine.sequence(level.id)) == 2


def test_add_without_targets_is_ignored(engine):
    attr = ValueAttribute(0.0)
    timed = fade(attr, 1.0)
    del attr
    gc.collect()

    assert engine.add(timed) is None
    assert engine.managed_ids() == []


def test_reset_discards_everything(engine, level):
    engine.add(fade(level, 10.0))
    engine.apply(500)

    engine.reset()
    assert engine.active_count() == 0
    assert engine.managed_ids() == []

    writes = []
    level.add_listener("test", writes.append)
    engine.apply(500)
    assert writes == []
    assert level.get() == pytest.approx(5.0)


def test_group_entry_retired_from_one_target_keeps_driving_the_other(engine, level):
    other = ValueAttribute(0.0, min_value=0.0, max_value=20.0)
    group = engine.add(TimedModifier(GroupValueModifier([level, other], 10.0), make_duration_temporal(1000)))
    engine.apply(100)

    engine.add(fade(level, 0.0, 100))
    engine.apply(100)
    assert level.get() == 0.0
    assert engine.sequence(level.id) == ()
    assert engine.sequence(other.id) == (group,)

    writes = []
    level.add_listener("test", writes.append)
    engine.apply(400)

    assert writes == []
    assert level.get() == 0.0
    assert other.get() == pytest.approx(7.12)
    assert engine.active_count() == 1


def test_finished_pulse_is_dropped_from_middle(engine, level):
    engine.add(fade(level, 10.0, 2000))
    engine.add(make_impulse(level, 0.0, 100))

    engine.apply(100)
    pulses = [tm for tm in engine.sequence(level.id) if tm.is_pulse()]
    assert pulses == []
    assert len(engine.sequence(level.id)) == 2


def test_non_positive_duration_is_floored(engine, level):
    engine.add_modifiers([ValueModifier(level, 7.0)], 0)
    engine.apply(1)
    assert level.get() == 7.0
    assert engine.managed_ids() == []


def test_deferred_actions(engine, level):
    action = engine.make_transition_action([ValueModifier(level, 10.0)], 1000)
    assert engine.active_count() == 0

    action()
    engine.apply(1000)
    assert level.get() == 10.0

    add = engine.make_add_action(fade(level, 0.0, 100))
    add()
    add()
    assert engine.active_count() == 3


def test_notify_required_update(engine, level):
    assert not engine.needs_update(level.id)
    engine.notify_required_update(level.id)
    assert engine.needs_update(level.id)

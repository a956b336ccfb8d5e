import gc

import pytest

from engine.modifiers import GroupValueModifier, ValueModifier, blend
from models.attribute import ValueAttribute


def test_blend_rule():
    assert blend(2.0, 10.0, -0.1) is None
    assert blend(2.0, 10.0, 0.0) == 2.0
    assert blend(2.0, 10.0, 0.5) == pytest.approx(6.0)
    assert blend(2.0, 10.0, 1.0) == 10.0
    assert blend(2.0, 10.0, 1.7) == 10.0


def test_value_modifier_mix(level):
    modifier = ValueModifier(level, 8.0)
    assert modifier.target_ids() == [level.id]

    modifier.mix(0.25)
    assert level.get() == pytest.approx(2.0)

    modifier.mix(-1.0)
    assert level.get() == pytest.approx(2.0)

    modifier.mix(1.0)
    assert level.get() == 8.0


def test_freeze_to_current_drops_persistence(level):
    level.set(3.0)
    modifier = ValueModifier(level, 8.0).set_persistence(True)

    frozen = modifier.freeze_to_current()
    assert frozen.aimed_value() == 3.0
    assert not frozen.is_persistent()

    aimed = modifier.freeze_to_aimed()
    assert aimed.aimed_value() == 8.0
    assert aimed.is_persistent()


def test_disposed_attribute_targets_nothing():
    attr = ValueAttribute(1.0)
    modifier = ValueModifier(attr, 5.0)
    del attr
    gc.collect()

    assert modifier.attribute is None
    assert modifier.target_ids() == []
    modifier.mix(1.0)


def test_group_modifier(level):
    other = ValueAttribute(10.0, min_value=0.0, max_value=20.0)
    group = GroupValueModifier([level, other], [4.0, 20.0])

    assert group.target_ids() == [level.id, other.id]
    group.mix(0.5)
    assert level.get() == pytest.approx(2.0)
    assert other.get() == pytest.approx(15.0)

    frozen = group.freeze_to_current()
    other.set(0.0)
    frozen.mix(1.0)
    assert other.get() == pytest.approx(15.0)


def test_group_modifier_scalar_and_mismatch(level):
    other = ValueAttribute(0.0)
    assert GroupValueModifier([level, other], 1.0).values == [1.0, 1.0]
    with pytest.raises(ValueError):
        GroupValueModifier([level, other], [1.0])


def test_mix_restricted_to_target_subset(level):
    other = ValueAttribute(0.0, min_value=0.0, max_value=20.0)
    group = GroupValueModifier([level, other], [4.0, 20.0])

    group.mix(1.0, only={other.id})
    assert level.get() == 0.0
    assert other.get() == 20.0

    ValueModifier(level, 4.0).mix(1.0, only=set())
    assert level.get() == 0.0

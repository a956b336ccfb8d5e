from types import SimpleNamespace

import pytest

from models.attribute import CallbackAttribute, FieldAttribute, ValueAttribute
from models.domain.attribute import AttributeConfig


def test_ids_are_unique():
    a, b = ValueAttribute(), ValueAttribute()
    assert a.id != b.id


def test_set_clamps_into_bounds(level):
    level.set(12.0)
    assert level.get() == 10.0
    level.set(-3.0)
    assert level.get() == 0.0


def test_clamping_can_be_disabled(level):
    level.set_enforce_extrema(False).set(12.0)
    assert level.get() == 12.0


def test_periodic_values_are_never_wrapped(hue):
    hue.set(361.0)
    assert hue.get() == 361.0
    assert hue.is_periodic()
    assert hue.period() == 360.0


def test_period_needs_both_bounds():
    assert ValueAttribute(0.0, min_value=0.0).period() == 0.0


def test_fluent_configuration():
    attr = ValueAttribute(0.0).set_min(1.0).set_max(5.0).set_periodic(True).set_name("x").set_unit("u")
    assert (attr.min, attr.max, attr.name, attr.unit) == (1.0, 5.0, "x", "u")
    assert attr.has_min() and attr.has_max()


def test_listeners(level):
    seen = []
    level.add_listener("owner", lambda a: seen.append(a.get()))
    level.set(3.0)
    level.set(4.0, notify=False)
    level.remove_listener("owner")
    level.set(5.0)
    assert seen == [3.0]


def test_failing_listener_does_not_block_others(level):
    seen = []

    def broken(_):
        raise RuntimeError("listener")

    level.add_listener("broken", broken)
    level.add_listener("ok", lambda a: seen.append(a.get()))
    level.set(2.0)
    assert level.get() == 2.0
    assert seen == [2.0]


def test_field_attribute():
    host = SimpleNamespace(gain=0.5)
    attr = FieldAttribute(host, "gain", min_value=0.0, max_value=1.0)
    assert attr.name == "gain"
    attr.set(2.0)
    assert host.gain == 1.0


def test_callback_attribute():
    store = {"v": 1.0}
    attr = CallbackAttribute(lambda: store["v"], lambda v: store.__setitem__("v", v))
    attr.set(7.0)
    assert attr.get() == 7.0


def test_attribute_config_build():
    config = AttributeConfig(name="hue", default=30.0, min=0.0, max=360.0, periodic=True, enforce_extrema=False)
    attr = config.build()
    assert attr.name == "hue"
    assert attr.get() == 30.0
    assert attr.is_periodic()
    assert not attr.enforce_extrema
    assert config.validate(100.0)
    assert not config.validate(400.0)

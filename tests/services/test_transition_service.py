import pytest

from managers.attribute_manager import AttributeManager
from managers.transition_manager import TransitionManager
from models.enums import TransitionKind
from models.events import EventType
from services.errors import TransitionTargetNotFoundError
from services.event_bus import EventBus
from services.transition_service import TransitionService


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def service(config_data, event_bus):
    attributes = AttributeManager(config_data)
    transitions = TransitionManager(config_data, attributes)
    return TransitionService(attributes, transitions, event_bus)


def value(service, name):
    return service.get_attribute(name).get()


@pytest.mark.asyncio
async def test_apply_configuration(service):
    assert await service.apply_configuration("warm") == 2

    await service.tick(500)
    assert value(service, "temperature") == pytest.approx(3350.0)
    await service.tick(500)
    assert value(service, "temperature") == pytest.approx(2700.0)
    assert value(service, "brightness") == pytest.approx(0.8)
    assert service.engine.active_count() == 0


@pytest.mark.asyncio
async def test_configuration_duration_override(service):
    await service.apply_configuration("warm", duration_ms=100)
    await service.tick(100)
    assert value(service, "temperature") == pytest.approx(2700.0)


@pytest.mark.asyncio
async def test_persistent_configuration_holds(service):
    await service.apply_configuration("hold")
    await service.tick(100)
    assert service.engine_snapshot()["managed_attributes"] == ["brightness"]

    service.get_attribute("brightness").set(0.2)
    await service.tick(16)
    assert value(service, "brightness") == 1.0


@pytest.mark.asyncio
async def test_impulse_returns_to_start(service):
    await service.trigger_impulse("flash")
    await service.tick(500)
    assert value(service, "brightness") == pytest.approx(1.0)
    await service.tick(500)
    assert value(service, "brightness") == pytest.approx(0.5)


@pytest.mark.asyncio
async def test_immediate_impulse(service):
    await service.trigger_impulse("kick")
    await service.tick(0)
    assert value(service, "hue") == pytest.approx(90.0)


@pytest.mark.asyncio
async def test_step_and_goto_state(service):
    assert await service.step_state("brightness_levels", 1) == 3
    await service.tick(500)
    assert value(service, "brightness") == pytest.approx(0.75)

    assert await service.goto_state("hue_steps", 3) == -1
    await service.tick(1000)
    assert value(service, "hue") == pytest.approx(-90.0)

    snapshot = service.state_snapshot("hue_steps")
    assert snapshot["current_index"] == -1
    assert snapshot["aimed_value"] == -90.0


@pytest.mark.asyncio
async def test_transition_attribute_duration_is_floored(service):
    await service.transition_attribute("brightness", 0.1, duration_ms=0)
    await service.tick(1)
    assert value(service, "brightness") == pytest.approx(0.1)


@pytest.mark.asyncio
async def test_set_attribute_clamps(service):
    assert await service.set_attribute("brightness", 3.0) == 1.0


@pytest.mark.asyncio
async def test_unknown_names_raise(service):
    with pytest.raises(TransitionTargetNotFoundError) as info:
        await service.apply_configuration("nope")
    assert info.value.code == "CONFIGURATION_NOT_FOUND"
    assert info.value.status_code == 404

    with pytest.raises(TransitionTargetNotFoundError):
        await service.trigger_impulse("nope")
    with pytest.raises(TransitionTargetNotFoundError):
        await service.step_state("nope", 1)
    with pytest.raises(TransitionTargetNotFoundError):
        await service.set_attribute("nope", 1.0)


@pytest.mark.asyncio
async def test_reset(service, event_bus):
    resets = []
    event_bus.subscribe(EventType.ENGINE_RESET, resets.append)

    await service.apply_configuration("warm")
    assert await service.reset() == 4
    assert service.engine.active_count() == 0
    assert resets[0].discarded == 4


@pytest.mark.asyncio
async def test_requests_publish_events(service, event_bus):
    events = []
    event_bus.subscribe(EventType.TRANSITION_REQUESTED, events.append)

    await service.apply_configuration("warm")
    await service.trigger_impulse("kick")
    await service.step_state("hue_steps", 1)
    await service.set_attribute("hue", 10.0)

    assert [(e.kind, e.target) for e in events] == [
        (TransitionKind.FADE, "warm"),
        (TransitionKind.IMMEDIATE_IMPULSE, "kick"),
        (TransitionKind.STATE_DELTA, "hue_steps"),
        (TransitionKind.DIRECT, "hue"),
    ]


@pytest.mark.asyncio
async def test_pre_tick_hooks(service):
    calls = []
    service.add_pre_tick_hook(lambda: calls.append("ok"))

    def broken():
        raise RuntimeError("hook")

    service.add_pre_tick_hook(broken)
    await service.tick(16)
    await service.tick(16)

    assert calls == ["ok", "ok"]
    assert service.ticks == 2
    assert service.last_elapsed_ms == 16


@pytest.mark.asyncio
async def test_run_locked(service):
    assert await service.run_locked(lambda: service.engine.active_count()) == 0


def test_snapshots(service):
    brightness = service.attribute_snapshot("brightness")
    assert brightness["value"] == 0.5
    assert brightness["active_transitions"] == 0
    assert [a["name"] for a in service.list_attributes()] == ["brightness", "hue", "temperature"]
    assert {s["name"] for s in service.list_states()} == {"hue_steps", "brightness_levels"}
    assert {c["name"] for c in service.list_configurations()} == {"warm", "hold"}
    assert {i["name"] for i in service.list_impulses()} == {"flash", "kick"}
    assert service.engine_snapshot()["active_count"] == 0

import pytest

from models.events import EventType, MidiKnobEvent, MidiPadEvent
from services.event_bus import EventBus
from services.middleware import log_middleware, make_knob_deadzone_middleware


@pytest.mark.asyncio
async def test_basic_pub_sub():
    bus = EventBus()
    received = []

    async def handler(event):
        received.append(event)

    bus.subscribe(EventType.MIDI_KNOB, handler)
    await bus.publish(MidiKnobEvent(10, 66))

    assert len(received) == 1
    assert received[0].value == 66
    assert received[0].data == {"control": 10, "value": 66, "delta_time": 0.0}


@pytest.mark.asyncio
async def test_priority_order_and_sync_handlers():
    bus = EventBus()
    order = []

    bus.subscribe(EventType.MIDI_PAD, lambda e: order.append("low"), priority=0)
    bus.subscribe(EventType.MIDI_PAD, lambda e: order.append("high"), priority=10)
    await bus.publish(MidiPadEvent(44, True))

    assert order == ["high", "low"]


@pytest.mark.asyncio
async def test_filtering():
    bus = EventBus()
    pressed = []
    bus.subscribe(EventType.MIDI_PAD, pressed.append, filter_fn=lambda e: e.pressed)

    await bus.publish(MidiPadEvent(44, True))
    await bus.publish(MidiPadEvent(44, False))
    assert len(pressed) == 1


@pytest.mark.asyncio
async def test_middleware_blocks_deadzone_knob_events():
    bus = EventBus()
    received = []
    bus.add_middleware(log_middleware)
    bus.add_middleware(make_knob_deadzone_middleware())
    bus.subscribe(EventType.MIDI_KNOB, received.append)

    await bus.publish(MidiKnobEvent(10, 64))
    await bus.publish(MidiKnobEvent(10, 63))
    assert [e.value for e in received] == [63]
    assert len(bus.get_event_history()) == 1
    assert bus.dropped[EventType.MIDI_KNOB] == 1
    assert bus.published[EventType.MIDI_KNOB] == 1


@pytest.mark.asyncio
async def test_handler_errors_are_isolated():
    bus = EventBus()
    received = []

    async def broken(event):
        raise RuntimeError("handler")

    bus.subscribe(EventType.MIDI_PAD, broken, priority=5)
    bus.subscribe(EventType.MIDI_PAD, received.append)
    await bus.publish(MidiPadEvent(44, True))

    assert len(received) == 1


@pytest.mark.asyncio
async def test_unsubscribe_and_history_limit():
    bus = EventBus(history_limit=3)
    received = []
    bus.subscribe(EventType.MIDI_PAD, received.append)

    assert bus.unsubscribe(EventType.MIDI_PAD, received.append)
    assert not bus.unsubscribe(EventType.MIDI_PAD, received.append)
    assert bus.handler_count(EventType.MIDI_PAD) == 0

    for control in range(5):
        await bus.publish(MidiPadEvent(control, True))
    assert received == []
    assert [e.control for e in bus.get_event_history()] == [2, 3, 4]

    bus.clear_history()
    assert bus.get_event_history() == []

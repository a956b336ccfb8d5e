import asyncio
import threading

import mido
import pytest

from hardware import MidiDevice, MidiInput
from lifecycle.handlers import MidiDeviceShutdownHandler
from models.domain.midi import MidiLayout
from models.events import EventType
from services.event_bus import EventBus


class FakePort:
    def __init__(self, name, callback):
        self.name = name
        self.callback = callback
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def ports(monkeypatch):
    opened = []

    def open_input(name, callback=None):
        port = FakePort(name, callback)
        opened.append(port)
        return port

    monkeypatch.setattr(mido, "get_input_names", lambda: ["Midi Through:0", "Arturia BeatStep:Arturia BeatStep MIDI 1 20:0"])
    monkeypatch.setattr(mido, "open_input", open_input)
    return opened


@pytest.mark.asyncio
async def test_opens_matching_port_and_feeds_messages(ports):
    bus = EventBus()
    events = []
    bus.subscribe(EventType.MIDI_KNOB, events.append)
    bus.subscribe(EventType.MIDI_PAD, events.append)
    midi = MidiInput(bus, MidiLayout())

    device = MidiDevice(midi, asyncio.get_running_loop(), "arturia beatstep")
    assert device.open() is True
    assert device.is_open
    assert ports[0].name.startswith("Arturia BeatStep")

    # Backend threads deliver messages off the event loop
    sender = threading.Thread(target=lambda: (
        ports[0].callback(mido.Message("control_change", control=10, value=66)),
        ports[0].callback(mido.Message("note_on", note=44, velocity=127)),
    ))
    sender.start()
    sender.join()
    await asyncio.sleep(0.01)

    assert await midi.receive_updates() == 2
    assert [e.type for e in events] == [EventType.MIDI_KNOB, EventType.MIDI_PAD]
    assert events[0].value == 66
    assert events[0].delta_time == 0.0
    assert events[1].pressed is True


@pytest.mark.asyncio
async def test_missing_device_is_not_fatal(ports):
    device = MidiDevice(MidiInput(EventBus()), asyncio.get_running_loop(), "Launchpad")

    assert device.open() is False
    assert not device.is_open
    assert ports == []


@pytest.mark.asyncio
async def test_shutdown_handler_closes_port(ports):
    device = MidiDevice(MidiInput(EventBus()), asyncio.get_running_loop())
    device.open()

    handler = MidiDeviceShutdownHandler(device)
    await handler.shutdown()
    assert ports[0].closed
    assert not device.is_open

    # Second run is a no-op
    await handler.shutdown()

import asyncio

import pytest

from engine.tick_loop import TickLoop
from lifecycle import ShutdownCoordinator
from lifecycle.handlers import TaskCancellationHandler, TickLoopShutdownHandler
from managers.attribute_manager import AttributeManager
from managers.transition_manager import TransitionManager
from services.transition_service import TransitionService


class RecordingHandler:
    def __init__(self, name, priority, calls, fail=False):
        self.name = name
        self.priority = priority
        self.calls = calls
        self.fail = fail

    @property
    def shutdown_priority(self):
        return self.priority

    async def shutdown(self):
        self.calls.append(self.name)
        if self.fail:
            raise RuntimeError("shutdown failed")


class SlowHandler:
    shutdown_priority = 50

    async def shutdown(self):
        await asyncio.sleep(10)


@pytest.mark.asyncio
async def test_handlers_run_by_priority_and_survive_errors():
    calls = []
    coordinator = ShutdownCoordinator()
    coordinator.register(RecordingHandler("low", 10, calls))
    coordinator.register(RecordingHandler("high", 100, calls, fail=True))
    coordinator.register(RecordingHandler("mid", 50, calls))

    await coordinator.shutdown_all()
    assert calls == ["high", "mid", "low"]


@pytest.mark.asyncio
async def test_handler_timeout_does_not_block_sequence():
    calls = []
    coordinator = ShutdownCoordinator(timeout_per_handler=0.01)
    coordinator.register(SlowHandler())
    coordinator.register(RecordingHandler("after", 10, calls))

    await coordinator.shutdown_all()
    assert calls == ["after"]


def test_register_rejects_incomplete_handlers():
    coordinator = ShutdownCoordinator()
    with pytest.raises(ValueError):
        coordinator.register(object())


@pytest.mark.asyncio
async def test_wait_for_shutdown_on_request():
    coordinator = ShutdownCoordinator()
    asyncio.get_running_loop().call_soon(coordinator.request_shutdown, "test")

    await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=1.0)
    assert coordinator.shutdown_requested


@pytest.mark.asyncio
async def test_wait_for_shutdown_on_task_failure():
    async def crash():
        raise RuntimeError("boom")

    async def finish():
        return None

    coordinator = ShutdownCoordinator()
    coordinator.watch(asyncio.create_task(finish()))
    coordinator.watch(asyncio.create_task(crash()))

    await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=1.0)
    assert coordinator.shutdown_requested


@pytest.mark.asyncio
async def test_tick_loop_handler_stops_loop_and_discards_transitions(config_data):
    attributes = AttributeManager(config_data)
    service = TransitionService(attributes, TransitionManager(config_data, attributes))
    tick_loop = TickLoop(service.tick, fps=120)
    await tick_loop.start()
    await service.apply_configuration("warm")

    coordinator = ShutdownCoordinator()
    handler = TickLoopShutdownHandler(tick_loop, service)
    coordinator.register(handler)
    assert coordinator.get_handler(TickLoopShutdownHandler) is handler

    await coordinator.shutdown_all()
    assert not tick_loop.running
    assert service.engine.active_count() == 0


@pytest.mark.asyncio
async def test_task_cancellation_handler():
    task = asyncio.create_task(asyncio.sleep(10))
    handler = TaskCancellationHandler([task])

    await handler.shutdown()
    assert task.cancelled()

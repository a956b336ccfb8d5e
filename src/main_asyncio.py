"""
main_asyncio.py - Application entry point for Glissando
-------------------------------------------------------

Responsible for:
- loading configuration and initializing managers and services
- wiring dependencies (Dependency Injection)
- running the tick loop, MIDI input and API server in one event loop
- graceful shutdown on Ctrl+C or fatal errors
"""

import sys

# Set UTF-8 encoding for output BEFORE logging starts (tree characters in log details)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio

from api.dependencies import set_service_container
from api.main import create_app
from controllers import MidiController
from engine.tick_loop import TickLoop
from engine.transition_engine import TransitionEngine
from hardware import MidiDevice, MidiInput
from lifecycle import APIServerWrapper, ShutdownCoordinator
from lifecycle.handlers import (
    APIServerShutdownHandler, MidiDeviceShutdownHandler, TaskCancellationHandler, TickLoopShutdownHandler
)
from managers import ConfigManager
from models.enums import LogCategory
from services import EventBus, ServiceContainer, TransitionService
from services.middleware import log_middleware, make_knob_deadzone_middleware
from utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


async def main():
    """Main async entry point (dependency injection and event loop startup)."""

    log.info("Starting Glissando...")

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config_manager = ConfigManager()
    config_manager.load()

    logging_config = config_manager.logging
    configure_logger(logging_config.level, logging_config.colors, logging_config.categories)

    engine_config = config_manager.engine
    api_config = config_manager.api

    # ========================================================================
    # 2. SERVICES
    # ========================================================================

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)
    event_bus.add_middleware(make_knob_deadzone_middleware())

    transition_service = TransitionService(
        attribute_manager=config_manager.attribute_manager,
        transition_manager=config_manager.transition_manager,
        event_bus=event_bus,
        engine=TransitionEngine(),
        min_duration_ms=engine_config.min_duration_ms
    )

    tick_loop = TickLoop(transition_service.tick, fps=engine_config.fps)

    services = ServiceContainer(
        transition_service=transition_service,
        event_bus=event_bus,
        config_manager=config_manager,
        tick_loop=tick_loop
    )
    set_service_container(services)

    # ========================================================================
    # 3. MIDI
    # ========================================================================

    background_tasks = []
    midi_manager = config_manager.midi_manager
    midi_device = None

    if midi_manager.enabled:
        midi_controller = MidiController(event_bus, transition_service, midi_manager.layout)
        midi_controller.load_bindings(midi_manager.bindings)
        midi_controller.subscribe()

        midi_input = MidiInput(event_bus, midi_manager.layout)
        background_tasks.append(asyncio.create_task(midi_input.run(), name="MidiInput"))

        midi_device = MidiDevice(midi_input, asyncio.get_running_loop(), midi_manager.port)
        try:
            midi_device.open()
        except Exception as e:
            log.error("Failed to open MIDI device, continuing without it", exception=e)
    else:
        log.info("MIDI disabled in config")

    # ========================================================================
    # 4. TICK LOOP + API SERVER
    # ========================================================================

    await tick_loop.start()

    coordinator = ShutdownCoordinator()
    coordinator.register(TickLoopShutdownHandler(tick_loop, transition_service))
    coordinator.watch(tick_loop.task)
    if midi_device is not None:
        coordinator.register(MidiDeviceShutdownHandler(midi_device))

    if api_config.enabled:
        api_wrapper = APIServerWrapper(create_app(cors_origins=api_config.cors_origins), host=api_config.host, port=api_config.port)
        api_task = asyncio.create_task(api_wrapper.start(), name="APIServer")
        coordinator.register(APIServerShutdownHandler(api_wrapper))
        coordinator.watch(api_task)
        background_tasks.append(api_task)

    coordinator.register(TaskCancellationHandler(background_tasks))

    # ========================================================================
    # 5. RUN UNTIL SHUTDOWN
    # ========================================================================

    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    log.info("Application initialized. Waiting for exit signal...")
    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    set_service_container(None)
    log.info("Glissando shut down cleanly.")


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------

def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except Exception as e:
        log.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()

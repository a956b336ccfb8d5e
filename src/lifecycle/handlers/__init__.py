from .api_server_shutdown_handler import APIServerShutdownHandler
from .midi_device_shutdown_handler import MidiDeviceShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler
from .tick_loop_shutdown_handler import TickLoopShutdownHandler

__all__ = [
    "APIServerShutdownHandler",
    "MidiDeviceShutdownHandler",
    "TaskCancellationHandler",
    "TickLoopShutdownHandler",
]

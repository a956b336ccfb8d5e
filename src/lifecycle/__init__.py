"""
Lifecycle subsystem
-------------------

Exports the public API for:
- graceful shutdown
- the embedded API server
- shutdown handlers

    from lifecycle import ShutdownCoordinator
    from lifecycle.handlers import TickLoopShutdownHandler
"""

from .shutdown_coordinator import ShutdownCoordinator
from .shutdown_protocol import IShutdownHandler
from .api_server_wrapper import APIServerWrapper
from . import handlers

__all__ = [
    "ShutdownCoordinator",
    "IShutdownHandler",
    "APIServerWrapper",
    "handlers",
]

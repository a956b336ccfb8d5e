"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass
from typing import Optional

from engine.tick_loop import TickLoop
from managers.config_manager import ConfigManager
from services.event_bus import EventBus
from services.transition_service import TransitionService


@dataclass
class ServiceContainer:
    """
    Centralized dependency injection container for core services and managers.

    Services included:
    - transition_service: Serialized access to the transition engine
    - event_bus: Pub-sub event routing for decoupling components
    - tick_loop: Host clock driving the engine (absent in tests)

    Managers included:
    - config_manager: Loaded configuration and sub-managers

    Usage:
        services = ServiceContainer(
            transition_service=transition_service,
            event_bus=event_bus,
            config_manager=config_manager,
            tick_loop=tick_loop
        )

        # API endpoints use services directly
        @router.get("/attributes")
        async def list_attributes(services: ServiceContainer = Depends(get_service_container)):
            return services.transition_service.list_attributes()
    """

    transition_service: TransitionService
    event_bus: EventBus
    config_manager: ConfigManager
    tick_loop: Optional[TickLoop] = None

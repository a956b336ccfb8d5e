"""Services layer"""

from .errors import DomainError, TransitionTargetNotFoundError, InvalidActionError
from .transition_service import TransitionService
from .event_bus import EventBus
from .service_container import ServiceContainer

__all__ = [
    "DomainError",
    "TransitionTargetNotFoundError",
    "InvalidActionError",
    "TransitionService",
    "EventBus",
    "ServiceContainer",
]

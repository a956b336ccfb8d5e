"""
API Dependencies - Service container access for FastAPI endpoints

Pattern:
1. main_asyncio.py creates the ServiceContainer during initialization
2. main_asyncio.py calls set_service_container() after creation
3. API endpoints use the get_service_container() dependency via Depends()

Example:
    @router.get("/attributes")
    async def list_attributes(services: ServiceContainer = Depends(get_service_container)):
        return services.transition_service.list_attributes()
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from services.service_container import ServiceContainer
from services.transition_service import TransitionService


# Global service container (set by main_asyncio.py during initialization)
_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """
    Store the service container for API access (None detaches it).

    Args:
        services: The ServiceContainer built at startup
    """
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing the service container.

    Raises:
        HTTPException: 503 Service Unavailable if services not initialized
    """
    if _service_container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized. Engine may still be starting."
        )
    return _service_container


async def get_transition_service(
    services: ServiceContainer = Depends(get_service_container)
) -> TransitionService:
    return services.transition_service

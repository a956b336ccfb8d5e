"""
Configuration and Impulse Endpoints - named target sets
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from api.dependencies import get_transition_service
from api.schemas.transition import (
    ConfigurationApplyRequest, ConfigurationListResponse, ConfigurationResponse,
    ImpulseListResponse, ImpulseResponse, TransitionResultResponse
)
from services.transition_service import TransitionService

router = APIRouter(
    prefix="/configurations",
    tags=["Configurations"],
)

impulse_router = APIRouter(
    prefix="/impulses",
    tags=["Impulses"],
)


@router.get(
    "",
    response_model=ConfigurationListResponse,
    summary="List configurations"
)
async def list_configurations(
    service: TransitionService = Depends(get_transition_service)
) -> ConfigurationListResponse:
    configurations = [ConfigurationResponse(**c) for c in service.list_configurations()]
    return ConfigurationListResponse(configurations=configurations, count=len(configurations))


@router.post(
    "/{name}/apply",
    response_model=TransitionResultResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Apply configuration"
)
async def apply_configuration(
    name: str,
    request: Optional[ConfigurationApplyRequest] = None,
    service: TransitionService = Depends(get_transition_service)
) -> TransitionResultResponse:
    """
    Fades every target attribute of the configuration to its value.

    **Errors:**
    - 404: Configuration (or one of its attributes) not found
    """
    duration = request.duration_ms if request is not None else None
    count = await service.apply_configuration(name, duration)
    return TransitionResultResponse(name=name, transitions=count)


@impulse_router.get(
    "",
    response_model=ImpulseListResponse,
    summary="List impulses"
)
async def list_impulses(
    service: TransitionService = Depends(get_transition_service)
) -> ImpulseListResponse:
    impulses = [ImpulseResponse(**i) for i in service.list_impulses()]
    return ImpulseListResponse(impulses=impulses, count=len(impulses))


@impulse_router.post(
    "/{name}/trigger",
    response_model=TransitionResultResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Trigger impulse"
)
async def trigger_impulse(
    name: str,
    service: TransitionService = Depends(get_transition_service)
) -> TransitionResultResponse:
    """Temporary excursion toward the impulse values, returning to the present values afterwards."""
    count = await service.trigger_impulse(name)
    return TransitionResultResponse(name=name, transitions=count)

"""
Attribute Endpoints - read, set and fade attributes
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_transition_service
from api.schemas.attribute import (
    AttributeListResponse, AttributeResponse, AttributeSetRequest, AttributeTransitionRequest
)
from models.enums import LogCategory
from services.transition_service import TransitionService
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(
    prefix="/attributes",
    tags=["Attributes"],
)


@router.get(
    "",
    response_model=AttributeListResponse,
    summary="List all attributes"
)
async def list_attributes(
    service: TransitionService = Depends(get_transition_service)
) -> AttributeListResponse:
    attributes = [AttributeResponse(**a) for a in service.list_attributes()]
    return AttributeListResponse(attributes=attributes, count=len(attributes))


@router.get(
    "/{name}",
    response_model=AttributeResponse,
    summary="Get attribute"
)
async def get_attribute(
    name: str,
    service: TransitionService = Depends(get_transition_service)
) -> AttributeResponse:
    """
    Current value, bounds and number of active transitions.

    **Errors:**
    - 404: Attribute not found
    """
    return AttributeResponse(**service.attribute_snapshot(name))


@router.put(
    "/{name}",
    response_model=AttributeResponse,
    summary="Set attribute value"
)
async def set_attribute(
    name: str,
    request: AttributeSetRequest,
    service: TransitionService = Depends(get_transition_service)
) -> AttributeResponse:
    """
    Sets the value immediately. A transition already running on the
    attribute keeps mixing over the new value.
    """
    await service.set_attribute(name, request.value)
    return AttributeResponse(**service.attribute_snapshot(name))


@router.post(
    "/{name}/transition",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Fade attribute to a value"
)
async def transition_attribute(
    name: str,
    request: AttributeTransitionRequest,
    service: TransitionService = Depends(get_transition_service)
) -> dict:
    await service.transition_attribute(name, request.value, request.duration_ms, request.persistent)
    return {"name": name, "value": request.value, "duration_ms": request.duration_ms}

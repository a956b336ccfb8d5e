"""
Engine Endpoints - status and reset
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from api.schemas.transition import EngineResetResponse, EngineResponse, TickMetrics
from models.enums import LogCategory
from services.service_container import ServiceContainer
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/engine", tags=["Engine"])


@router.get(
    "",
    response_model=EngineResponse,
    summary="Engine status"
)
async def get_engine(
    services: ServiceContainer = Depends(get_service_container)
) -> EngineResponse:
    """
    Returns:
        - managed_attributes: Attributes with an active transition sequence
        - active_count: Tracked timed modifiers
        - tick_loop: Tick loop metrics, when a loop is running
    """
    snapshot = services.transition_service.engine_snapshot()
    metrics = None
    if services.tick_loop is not None:
        metrics = TickMetrics(**services.tick_loop.get_metrics())
    return EngineResponse(**snapshot, tick_loop=metrics)


@router.post(
    "/reset",
    response_model=EngineResetResponse,
    summary="Discard all transitions"
)
async def reset_engine(
    services: ServiceContainer = Depends(get_service_container)
) -> EngineResetResponse:
    """Attributes keep their present values."""
    discarded = await services.transition_service.reset()
    log.info("Engine reset via API", discarded=discarded)
    return EngineResetResponse(discarded=discarded)

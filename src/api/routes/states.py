"""
State Endpoints - step and jump through indexed levels
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_transition_service
from api.schemas.transition import (
    StateGotoRequest, StateListResponse, StateResponse, StateStepRequest, TransitionResultResponse
)
from services.transition_service import TransitionService

router = APIRouter(
    prefix="/states",
    tags=["States"],
)


@router.get(
    "",
    response_model=StateListResponse,
    summary="List states"
)
async def list_states(
    service: TransitionService = Depends(get_transition_service)
) -> StateListResponse:
    states = [StateResponse(**s) for s in service.list_states()]
    return StateListResponse(states=states, count=len(states))


@router.get(
    "/{name}",
    response_model=StateResponse,
    summary="Get state"
)
async def get_state(
    name: str,
    service: TransitionService = Depends(get_transition_service)
) -> StateResponse:
    return StateResponse(**service.state_snapshot(name))


@router.post(
    "/{name}/step",
    response_model=TransitionResultResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Step state by delta levels"
)
async def step_state(
    name: str,
    request: StateStepRequest,
    service: TransitionService = Depends(get_transition_service)
) -> TransitionResultResponse:
    """
    Moves the aimed level by `delta`. Periodic attributes keep stepping
    past the last level into the next period.

    **Errors:**
    - 404: State not found
    """
    aimed = await service.step_state(name, request.delta, request.duration_ms)
    return TransitionResultResponse(name=name, aimed_index=aimed)


@router.post(
    "/{name}/goto",
    response_model=TransitionResultResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Go to level index"
)
async def goto_state(
    name: str,
    request: StateGotoRequest,
    service: TransitionService = Depends(get_transition_service)
) -> TransitionResultResponse:
    aimed = await service.goto_state(name, request.index, request.duration_ms)
    return TransitionResultResponse(name=name, aimed_index=aimed)

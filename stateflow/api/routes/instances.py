"""
Instance API Routes.

Endpoints for inspecting workflow instances and executing actions on them.
"""

from typing import Optional
from fastapi import APIRouter, Depends

from stateflow.api.dependencies import get_engine
from stateflow.api.schemas import (
    ErrorResponse,
    ExecuteActionRequest,
    InstanceListResponse,
    InstanceResponse,
)
from stateflow.engine.executor import InstanceEngine


router = APIRouter(prefix="/workflows/instances", tags=["Instances"])


@router.get(
    "",
    response_model=InstanceListResponse,
)
async def list_instances(
    definition_id: Optional[str] = None,
    engine: InstanceEngine = Depends(get_engine),
) -> InstanceListResponse:
    """List all instances, optionally filtered by definition_id."""
    instances = await engine.list_all(definition_id)
    items = [InstanceResponse.from_instance(i) for i in instances]
    return InstanceListResponse(instances=items, total=len(items))


@router.get(
    "/{instance_id}",
    response_model=InstanceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_instance(
    instance_id: str,
    engine: InstanceEngine = Depends(get_engine),
) -> InstanceResponse:
    """
    Get the current state and history of an instance.

    Also lists the actions that can be executed from the current state.
    """
    instance = await engine.get(instance_id)
    actions = await engine.available_actions(instance_id)
    return InstanceResponse.from_instance(instance, actions)


@router.post(
    "/{instance_id}/execute",
    response_model=InstanceResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Action cannot be executed"},
        404: {"model": ErrorResponse},
    }
)
async def execute_action(
    instance_id: str,
    request: ExecuteActionRequest,
    engine: InstanceEngine = Depends(get_engine),
) -> InstanceResponse:
    """Execute an action, moving the instance to the action's target state."""
    instance = await engine.execute(instance_id, request.action_id)
    actions = await engine.available_actions(instance_id)
    return InstanceResponse.from_instance(instance, actions)

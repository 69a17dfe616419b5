"""
Definition API Routes.

Endpoints for admitting and inspecting workflow definitions, and for
starting instances of them.
"""

from fastapi import APIRouter, Depends, status

from stateflow.api.dependencies import get_definition_store, get_engine
from stateflow.api.schemas import (
    DefinitionCreateRequest,
    DefinitionListResponse,
    DefinitionResponse,
    ErrorResponse,
    InstanceResponse,
)
from stateflow.engine.executor import InstanceEngine
from stateflow.storage.memory import DefinitionStore


router = APIRouter(prefix="/workflows/definitions", tags=["Definitions"])


@router.post(
    "",
    response_model=DefinitionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid definition"},
    }
)
async def create_definition(
    request: DefinitionCreateRequest,
    definitions: DefinitionStore = Depends(get_definition_store),
) -> DefinitionResponse:
    """
    Create a new workflow definition.

    The definition needs a name, exactly one initial state, unique state
    and action ids, and actions that only reference declared states.
    """
    definition = await definitions.admit(request)
    return DefinitionResponse.from_definition(definition, include_diagram=True)


@router.get(
    "",
    response_model=DefinitionListResponse,
)
async def list_definitions(
    definitions: DefinitionStore = Depends(get_definition_store),
) -> DefinitionListResponse:
    """List all workflow definitions."""
    stored = await definitions.list_all()
    items = [DefinitionResponse.from_definition(d) for d in stored]
    return DefinitionListResponse(definitions=items, total=len(items))


@router.get(
    "/{definition_id}",
    response_model=DefinitionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_definition(
    definition_id: str,
    definitions: DefinitionStore = Depends(get_definition_store),
) -> DefinitionResponse:
    """Get a workflow definition, including a Mermaid diagram of it."""
    definition = await definitions.get(definition_id)
    return DefinitionResponse.from_definition(definition, include_diagram=True)


@router.post(
    "/{definition_id}/instances",
    response_model=InstanceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Definition cannot be started"},
        404: {"model": ErrorResponse},
    }
)
async def start_instance(
    definition_id: str,
    engine: InstanceEngine = Depends(get_engine),
) -> InstanceResponse:
    """Start a new instance of a definition at its initial state."""
    instance = await engine.start(definition_id)
    actions = await engine.available_actions(instance.id)
    return InstanceResponse.from_instance(instance, actions)

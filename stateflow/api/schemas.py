"""
Pydantic Schemas for API Request/Response Models.

These schemas define the structure of data flowing through the API,
providing automatic validation and documentation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from stateflow.engine.models import (
    Action,
    DefinitionProposal,
    HistoryEntry,
    State,
    WorkflowDefinition,
    WorkflowInstance,
)


# ============================================================
# Definition Schemas
# ============================================================

class DefinitionCreateRequest(DefinitionProposal):
    """Request to create a new workflow definition."""

    class Config:
        json_schema_extra = {
            "example": {
                "name": "document_approval",
                "states": [
                    {"id": "draft", "name": "Draft", "is_initial": True},
                    {"id": "review", "name": "In Review"},
                    {"id": "approved", "name": "Approved", "is_final": True}
                ],
                "actions": [
                    {"id": "submit", "name": "Submit", "from_states": ["draft"], "to_state": "review"},
                    {"id": "approve", "name": "Approve", "from_states": ["review"], "to_state": "approved"}
                ]
            }
        }


class DefinitionResponse(BaseModel):
    """Response with a workflow definition."""
    id: str
    name: str
    states: List[State]
    actions: List[Action]
    created_at: datetime
    mermaid_diagram: Optional[str] = Field(None, description="Mermaid diagram of the definition")

    @classmethod
    def from_definition(
        cls,
        definition: WorkflowDefinition,
        include_diagram: bool = False,
    ) -> "DefinitionResponse":
        return cls(
            id=definition.id,
            name=definition.name,
            states=list(definition.states),
            actions=list(definition.actions),
            created_at=definition.created_at,
            mermaid_diagram=definition.to_mermaid() if include_diagram else None,
        )


class DefinitionListResponse(BaseModel):
    """Response listing all definitions."""
    definitions: List[DefinitionResponse]
    total: int


# ============================================================
# Instance Schemas
# ============================================================

class ExecuteActionRequest(BaseModel):
    """Request to execute an action on an instance."""
    action_id: str = Field(..., description="ID of the action to execute")

    class Config:
        json_schema_extra = {
            "example": {"action_id": "submit"}
        }


class InstanceResponse(BaseModel):
    """Response with a workflow instance."""
    id: str
    definition_id: str
    current_state_id: str
    history: List[HistoryEntry]
    created_at: datetime
    available_actions: Optional[List[str]] = Field(
        None,
        description="IDs of the actions that can be executed next",
    )

    @classmethod
    def from_instance(
        cls,
        instance: WorkflowInstance,
        available_actions: Optional[List[Action]] = None,
    ) -> "InstanceResponse":
        return cls(
            id=instance.id,
            definition_id=instance.definition_id,
            current_state_id=instance.current_state_id,
            history=instance.history,
            created_at=instance.created_at,
            available_actions=(
                [a.id for a in available_actions] if available_actions is not None else None
            ),
        )


class InstanceListResponse(BaseModel):
    """Response listing instances."""
    instances: List[InstanceResponse]
    total: int


# ============================================================
# Error Schemas
# ============================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    kind: Optional[str] = None
    detail: Optional[str] = None

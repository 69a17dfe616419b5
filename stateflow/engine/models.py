"""
Workflow Data Model.

States and actions form the directed graph of a workflow definition.
Definitions are frozen once admitted; instances track a current state and
an append-only history of executed transitions.
"""

from typing import List, Optional, Tuple
from pydantic import BaseModel, Field
from datetime import datetime, timezone
import uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class State(BaseModel):
    """A node in a workflow graph."""

    id: str
    name: str
    is_initial: bool = False
    is_final: bool = False
    enabled: bool = True
    description: Optional[str] = None

    class Config:
        frozen = True


class Action(BaseModel):
    """
    A directed transition from one or more source states to a single target.

    Attributes:
        from_states: State ids the action may be executed from
        to_state: State id the instance moves to
    """

    id: str
    name: str
    enabled: bool = True
    from_states: Tuple[str, ...] = Field(..., min_length=1)
    to_state: str

    class Config:
        frozen = True


class DefinitionProposal(BaseModel):
    """An unvalidated workflow definition, as submitted for admission."""

    name: str
    states: List[State] = Field(default_factory=list)
    actions: List[Action] = Field(default_factory=list)


class WorkflowDefinition(BaseModel):
    """
    An admitted workflow definition.

    Definitions are never modified after admission, so the model is frozen
    and its collections are tuples.
    """

    id: str = Field(default_factory=new_id)
    name: str
    states: Tuple[State, ...] = ()
    actions: Tuple[Action, ...] = ()
    created_at: datetime = Field(default_factory=utcnow)

    class Config:
        frozen = True

    def get_state(self, state_id: str) -> Optional[State]:
        """Get a state by id."""
        for state in self.states:
            if state.id == state_id:
                return state
        return None

    def get_action(self, action_id: str) -> Optional[Action]:
        """Get an action by id."""
        for action in self.actions:
            if action.id == action_id:
                return action
        return None

    def initial_state(self) -> Optional[State]:
        """Get the state flagged as initial, if any."""
        for state in self.states:
            if state.is_initial:
                return state
        return None

    def to_mermaid(self) -> str:
        """Render the definition as a Mermaid state diagram."""
        lines = ["stateDiagram-v2"]

        for state in self.states:
            lines.append(f"    {state.id} : {state.name}")
            if state.is_initial:
                lines.append(f"    [*] --> {state.id}")
            if state.is_final:
                lines.append(f"    {state.id} --> [*]")

        for action in self.actions:
            for source in action.from_states:
                lines.append(f"    {source} --> {action.to_state} : {action.name}")

        return "\n".join(lines)


class HistoryEntry(BaseModel):
    """An audit record of one executed transition."""

    action_id: str
    # Snapshot of the action name at execution time
    action_name: str
    from_state_id: str
    to_state_id: str
    timestamp: datetime = Field(default_factory=utcnow)

    class Config:
        frozen = True


class WorkflowInstance(BaseModel):
    """
    One execution of a workflow definition.

    Attributes:
        definition_id: Id of the definition this instance runs (lookup only)
        current_state_id: Id of the state the instance is currently in
        history: Transitions executed so far, oldest first
    """

    id: str = Field(default_factory=new_id)
    definition_id: str
    current_state_id: str
    history: List[HistoryEntry] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

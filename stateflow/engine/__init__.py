"""
Engine package - Definition validation and instance execution.
"""

from stateflow.engine.models import (
    State,
    Action,
    DefinitionProposal,
    WorkflowDefinition,
    WorkflowInstance,
    HistoryEntry,
)
from stateflow.engine.errors import WorkflowError, ErrorKind
from stateflow.engine.validator import validate_definition
from stateflow.engine.executor import InstanceEngine

__all__ = [
    "State",
    "Action",
    "DefinitionProposal",
    "WorkflowDefinition",
    "WorkflowInstance",
    "HistoryEntry",
    "WorkflowError",
    "ErrorKind",
    "validate_definition",
    "InstanceEngine",
]

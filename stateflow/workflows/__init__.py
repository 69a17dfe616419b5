"""
Workflows package - Sample workflow definitions.
"""

from stateflow.workflows.document_approval import (
    DEMO_DEFINITION_ID,
    create_document_approval_workflow,
    register_document_approval_workflow,
)

__all__ = [
    "DEMO_DEFINITION_ID",
    "create_document_approval_workflow",
    "register_document_approval_workflow",
]

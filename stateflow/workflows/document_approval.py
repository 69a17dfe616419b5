"""
Document Approval Workflow.

The sample workflow registered at startup:
1. A document starts as a draft
2. Submitting it sends it to review
3. Review either approves it or sends it back to draft
4. A draft or a document in review can be withdrawn
"""

import logging

from stateflow.engine.models import Action, DefinitionProposal, State, WorkflowDefinition
from stateflow.storage.memory import DefinitionStore


logger = logging.getLogger(__name__)

DEMO_DEFINITION_ID = "document-approval-demo"


def create_document_approval_workflow() -> DefinitionProposal:
    """Build the document approval definition."""
    return DefinitionProposal(
        name="Document Approval Demo",
        states=[
            State(id="draft", name="Draft", is_initial=True,
                  description="Document is being written"),
            State(id="review", name="In Review"),
            State(id="approved", name="Approved", is_final=True),
            State(id="withdrawn", name="Withdrawn", is_final=True),
        ],
        actions=[
            Action(id="submit", name="Submit", from_states=["draft"], to_state="review"),
            Action(id="approve", name="Approve", from_states=["review"], to_state="approved"),
            Action(id="reject", name="Request Changes", from_states=["review"], to_state="draft"),
            Action(id="withdraw", name="Withdraw", from_states=["draft", "review"],
                   to_state="withdrawn"),
        ],
    )


async def register_document_approval_workflow(definitions: DefinitionStore) -> WorkflowDefinition:
    """
    Register the document approval workflow under a fixed id.

    This makes the workflow available immediately via the API
    without needing to create it first.
    """
    definition = await definitions.admit(
        create_document_approval_workflow(),
        definition_id=DEMO_DEFINITION_ID,
    )
    logger.info(f"Registered Document Approval workflow with ID: {DEMO_DEFINITION_ID}")
    return definition

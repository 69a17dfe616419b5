"""
Definition Validator.

Decides whether a proposed workflow definition is well-formed before it is
admitted to the catalog. Checks run in a fixed order and the first failure
is raised.
"""

from typing import Iterable, Optional

from stateflow.engine.errors import (
    DuplicateActionIdError,
    DuplicateStateIdError,
    InitialStateCountError,
    InvalidNameError,
    NoStatesError,
    UnknownStateReferenceError,
)
from stateflow.engine.models import DefinitionProposal


def _first_duplicate(ids: Iterable[str]) -> Optional[str]:
    seen = set()
    for item in ids:
        if item in seen:
            return item
        seen.add(item)
    return None


def validate_definition(proposal: DefinitionProposal) -> None:
    """
    Validate a definition proposal.

    Args:
        proposal: The definition to validate

    Raises:
        DefinitionValidationError: On the first rule the proposal breaks
    """
    if not proposal.name or not proposal.name.strip():
        raise InvalidNameError()

    if not proposal.states:
        raise NoStatesError()

    duplicate = _first_duplicate(s.id for s in proposal.states)
    if duplicate is not None:
        raise DuplicateStateIdError(duplicate)

    duplicate = _first_duplicate(a.id for a in proposal.actions)
    if duplicate is not None:
        raise DuplicateActionIdError(duplicate)

    initial_count = sum(1 for s in proposal.states if s.is_initial)
    if initial_count != 1:
        raise InitialStateCountError(initial_count)

    state_ids = {s.id for s in proposal.states}
    for action in proposal.actions:
        if action.to_state not in state_ids:
            raise UnknownStateReferenceError(action.id, action.to_state, role="target")
        for source in action.from_states:
            if source not in state_ids:
                raise UnknownStateReferenceError(action.id, source, role="source")

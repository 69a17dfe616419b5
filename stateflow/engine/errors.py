"""
Workflow engine errors.

Every rejection raised by the engine is a WorkflowError carrying a stable
``code`` and one of three kinds, which the API layer maps to a response.
"""

from typing import Any, Dict, Optional


class ErrorKind:
    VALIDATION = "Validation"
    NOT_FOUND = "NotFound"
    ILLEGAL_OPERATION = "IllegalOperation"


class WorkflowError(Exception):
    """Base class for all workflow engine errors."""

    code: str = "WorkflowError"
    kind: str = ErrorKind.ILLEGAL_OPERATION

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context: Dict[str, Any] = context
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "kind": self.kind,
            "detail": self.message,
        }


# ============================================================
# Validation (definition admission)
# ============================================================

class DefinitionValidationError(WorkflowError):
    kind = ErrorKind.VALIDATION


class InvalidNameError(DefinitionValidationError):
    code = "InvalidName"

    def __init__(self):
        super().__init__("Definition name is required")


class NoStatesError(DefinitionValidationError):
    code = "NoStates"

    def __init__(self):
        super().__init__("At least one state is required")


class DuplicateStateIdError(DefinitionValidationError):
    code = "DuplicateStateId"

    def __init__(self, state_id: str):
        self.state_id = state_id
        super().__init__(f"Duplicate state id '{state_id}'", state_id=state_id)


class DuplicateActionIdError(DefinitionValidationError):
    code = "DuplicateActionId"

    def __init__(self, action_id: str):
        self.action_id = action_id
        super().__init__(f"Duplicate action id '{action_id}'", action_id=action_id)


class InitialStateCountError(DefinitionValidationError):
    code = "InitialStateCountError"

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Exactly one initial state is required, found {count}",
            count=count,
        )


class UnknownStateReferenceError(DefinitionValidationError):
    code = "UnknownStateReference"

    def __init__(self, action_id: str, state_id: str, role: str = "target"):
        self.action_id = action_id
        self.state_id = state_id
        super().__init__(
            f"Action '{action_id}' references unknown {role} state '{state_id}'",
            action_id=action_id,
            state_id=state_id,
        )


class DuplicateDefinitionIdError(DefinitionValidationError):
    code = "DuplicateDefinitionId"

    def __init__(self, definition_id: str):
        super().__init__(
            f"Definition '{definition_id}' already exists",
            definition_id=definition_id,
        )


# ============================================================
# Not found (lookups)
# ============================================================

class NotFoundError(WorkflowError):
    kind = ErrorKind.NOT_FOUND


class DefinitionNotFoundError(NotFoundError):
    code = "DefinitionNotFound"

    def __init__(self, definition_id: str):
        super().__init__(
            f"Definition '{definition_id}' not found",
            definition_id=definition_id,
        )


class InstanceNotFoundError(NotFoundError):
    code = "InstanceNotFound"

    def __init__(self, instance_id: str):
        super().__init__(
            f"Instance '{instance_id}' not found",
            instance_id=instance_id,
        )


class ActionNotFoundError(NotFoundError):
    code = "ActionNotFound"

    def __init__(self, action_id: str, definition_id: Optional[str] = None):
        super().__init__(
            f"Action '{action_id}' not found in definition",
            action_id=action_id,
            definition_id=definition_id,
        )


# ============================================================
# Illegal operations (execution-time rules)
# ============================================================

class IllegalOperationError(WorkflowError):
    kind = ErrorKind.ILLEGAL_OPERATION


class NoInitialStateError(IllegalOperationError):
    code = "NoInitialState"

    def __init__(self, definition_id: str):
        super().__init__(
            "No initial state found in definition",
            definition_id=definition_id,
        )


class ActionDisabledError(IllegalOperationError):
    code = "ActionDisabled"

    def __init__(self, action_id: str):
        super().__init__(f"Action '{action_id}' is disabled", action_id=action_id)


class IllegalTransitionError(IllegalOperationError):
    code = "IllegalTransition"

    def __init__(self, action_id: str, state_id: str):
        super().__init__(
            f"Action '{action_id}' cannot be executed from current state '{state_id}'",
            action_id=action_id,
            state_id=state_id,
        )


class TerminalStateError(IllegalOperationError):
    code = "TerminalState"

    def __init__(self, state_id: str):
        super().__init__(
            f"Cannot execute actions from final state '{state_id}'",
            state_id=state_id,
        )


class TargetStateNotFoundError(IllegalOperationError):
    code = "TargetStateNotFound"

    def __init__(self, state_id: str):
        super().__init__(f"Target state '{state_id}' not found", state_id=state_id)

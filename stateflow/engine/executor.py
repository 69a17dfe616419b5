"""
Workflow Instance Engine.

Starts instances of admitted definitions and moves them between states by
executing actions. Every check in ``execute`` runs before the single
mutation, so a rejected action never changes the instance.
"""

from typing import TYPE_CHECKING, List, Optional
import logging

from stateflow.engine.errors import (
    ActionDisabledError,
    ActionNotFoundError,
    DefinitionNotFoundError,
    IllegalTransitionError,
    InstanceNotFoundError,
    NoInitialStateError,
    TargetStateNotFoundError,
    TerminalStateError,
)
from stateflow.engine.models import Action, HistoryEntry, WorkflowInstance

if TYPE_CHECKING:
    from stateflow.storage.memory import DefinitionStore, InstanceStore


logger = logging.getLogger(__name__)


class InstanceEngine:
    """
    Executes workflow instances against their definitions.

    The engine owns no data itself: definitions and instances live in the
    stores handed to it, so separate engines can share or isolate them.

    Usage:
        engine = InstanceEngine(DefinitionStore(), InstanceStore())
        instance = await engine.start(definition.id)
        instance = await engine.execute(instance.id, "submit")
    """

    def __init__(self, definitions: "DefinitionStore", instances: "InstanceStore"):
        self.definitions = definitions
        self.instances = instances

    async def start(self, definition_id: str) -> WorkflowInstance:
        """
        Start a new instance at the definition's initial state.

        Raises:
            DefinitionNotFoundError: If the definition does not exist
            NoInitialStateError: If the definition has no initial state
        """
        definition = await self.definitions.find(definition_id)
        if definition is None:
            raise DefinitionNotFoundError(definition_id)

        initial = definition.initial_state()
        if initial is None:
            raise NoInitialStateError(definition_id)

        instance = WorkflowInstance(
            definition_id=definition.id,
            current_state_id=initial.id,
        )
        instance = await self.instances.add(instance)

        logger.info(f"Started instance {instance.id} of {definition.id} at '{initial.id}'")
        return instance

    async def execute(self, instance_id: str, action_id: str) -> WorkflowInstance:
        """
        Execute an action on an instance.

        Calls for the same instance are serialized by the instance's lock;
        calls for different instances run independently.

        Args:
            instance_id: The instance to advance
            action_id: The action to execute

        Returns:
            The updated instance

        Raises:
            NotFoundError: If the instance, its definition or the action is missing
            IllegalOperationError: If the action may not run from the current state
        """
        lock = await self.instances.lock_for(instance_id)
        if lock is None:
            raise InstanceNotFoundError(instance_id)

        async with lock:
            instance = await self.instances.get(instance_id)
            if instance is None:
                raise InstanceNotFoundError(instance_id)

            definition = await self.definitions.find(instance.definition_id)
            if definition is None:
                raise DefinitionNotFoundError(instance.definition_id)

            action = definition.get_action(action_id)
            if action is None:
                raise ActionNotFoundError(action_id, definition.id)

            if not action.enabled:
                raise ActionDisabledError(action.id)

            current_id = instance.current_state_id
            current = definition.get_state(current_id)
            is_final = current is not None and current.is_final

            if current_id not in action.from_states:
                if is_final:
                    raise TerminalStateError(current_id)
                raise IllegalTransitionError(action.id, current_id)

            if is_final:
                raise TerminalStateError(current_id)

            target = definition.get_state(action.to_state)
            if target is None:
                raise TargetStateNotFoundError(action.to_state)

            # All checks passed
            instance.current_state_id = target.id
            instance.history.append(HistoryEntry(
                action_id=action.id,
                action_name=action.name,
                from_state_id=current_id,
                to_state_id=target.id,
            ))
            instance = await self.instances.replace(instance)

        logger.info(
            f"Instance {instance_id}: '{action.id}' moved {current_id} -> {target.id}"
        )
        return instance

    async def get(self, instance_id: str) -> WorkflowInstance:
        """Get an instance by ID, raising if it does not exist."""
        instance = await self.instances.get(instance_id)
        if instance is None:
            raise InstanceNotFoundError(instance_id)
        return instance

    async def list_all(self, definition_id: Optional[str] = None) -> List[WorkflowInstance]:
        """List all instances, optionally filtered by definition."""
        return await self.instances.list_all(definition_id)

    async def available_actions(self, instance_id: str) -> List[Action]:
        """
        List the actions that can currently be executed on an instance.

        Empty when the instance is in a final state.
        """
        instance = await self.get(instance_id)
        definition = await self.definitions.find(instance.definition_id)
        if definition is None:
            raise DefinitionNotFoundError(instance.definition_id)

        current = definition.get_state(instance.current_state_id)
        if current is None or current.is_final:
            return []

        return [
            action for action in definition.actions
            if action.enabled
            and current.id in action.from_states
            and definition.get_state(action.to_state) is not None
        ]

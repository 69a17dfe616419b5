"""
In-Memory Storage for StateFlow.

Provides coroutine-safe catalogs for workflow definitions and instances.
Each catalog is guarded by its own asyncio lock; instances additionally get
a lock of their own so that executing an action on one instance never waits
on another.
"""

from typing import Dict, List, Optional
import asyncio
import logging

from stateflow.engine.errors import DefinitionNotFoundError, DuplicateDefinitionIdError
from stateflow.engine.models import DefinitionProposal, WorkflowDefinition, WorkflowInstance
from stateflow.engine.validator import validate_definition


logger = logging.getLogger(__name__)


class DefinitionStore:
    """
    Catalog of admitted workflow definitions.

    Definitions enter only through ``admit``, which validates them first.
    Stored definitions are frozen and are never updated or removed.
    """

    def __init__(self):
        self._definitions: Dict[str, WorkflowDefinition] = {}
        self._lock = asyncio.Lock()

    async def admit(
        self,
        proposal: DefinitionProposal,
        definition_id: Optional[str] = None,
    ) -> WorkflowDefinition:
        """
        Validate a proposal and store it as a new definition.

        Args:
            proposal: The proposed definition
            definition_id: Fixed id to use instead of a generated one

        Returns:
            The admitted definition

        Raises:
            DefinitionValidationError: If the proposal is not well-formed
        """
        validate_definition(proposal)

        fields = {
            "name": proposal.name,
            "states": tuple(proposal.states),
            "actions": tuple(proposal.actions),
        }
        if definition_id is not None:
            fields["id"] = definition_id
        definition = WorkflowDefinition(**fields)

        async with self._lock:
            if definition.id in self._definitions:
                raise DuplicateDefinitionIdError(definition.id)
            self._definitions[definition.id] = definition

        logger.info(
            f"Admitted definition: {definition.id} ({definition.name}, "
            f"{len(definition.states)} states, {len(definition.actions)} actions)"
        )
        return definition

    async def find(self, definition_id: str) -> Optional[WorkflowDefinition]:
        """Get a definition by ID, or None."""
        async with self._lock:
            return self._definitions.get(definition_id)

    async def get(self, definition_id: str) -> WorkflowDefinition:
        """Get a definition by ID, raising if it does not exist."""
        definition = await self.find(definition_id)
        if definition is None:
            raise DefinitionNotFoundError(definition_id)
        return definition

    async def list_all(self) -> List[WorkflowDefinition]:
        """List all stored definitions."""
        async with self._lock:
            return list(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


class InstanceStore:
    """
    Catalog of workflow instances.

    Callers always receive copies; the stored instance changes only through
    ``replace``, which swaps in a whole new object.
    """

    def __init__(self):
        self._instances: Dict[str, WorkflowInstance] = {}
        self._instance_locks: Dict[str, asyncio.Lock] = {}
        self._lock = asyncio.Lock()

    async def add(self, instance: WorkflowInstance) -> WorkflowInstance:
        """Store a new instance and create its mutation lock."""
        async with self._lock:
            if instance.id in self._instances:
                raise ValueError(f"Instance '{instance.id}' already exists")
            self._instances[instance.id] = instance.model_copy(deep=True)
            self._instance_locks[instance.id] = asyncio.Lock()
            return instance.model_copy(deep=True)

    async def get(self, instance_id: str) -> Optional[WorkflowInstance]:
        """Get a copy of an instance by ID."""
        async with self._lock:
            stored = self._instances.get(instance_id)
            return stored.model_copy(deep=True) if stored else None

    async def lock_for(self, instance_id: str) -> Optional[asyncio.Lock]:
        """Get the mutation lock of an instance, or None if it does not exist."""
        async with self._lock:
            return self._instance_locks.get(instance_id)

    async def replace(self, instance: WorkflowInstance) -> WorkflowInstance:
        """
        Replace a stored instance with an updated version.

        Callers must hold the instance's lock from ``lock_for``.
        """
        async with self._lock:
            if instance.id not in self._instances:
                raise KeyError(instance.id)
            self._instances[instance.id] = instance.model_copy(deep=True)
            return instance.model_copy(deep=True)

    async def list_all(self, definition_id: Optional[str] = None) -> List[WorkflowInstance]:
        """List all instances, optionally only those of one definition."""
        async with self._lock:
            return [
                i.model_copy(deep=True)
                for i in self._instances.values()
                if definition_id is None or i.definition_id == definition_id
            ]

    def __len__(self) -> int:
        return len(self._instances)

"""
Storage package - In-memory catalogs for definitions and instances.
"""

from stateflow.storage.memory import (
    DefinitionStore,
    InstanceStore,
)

__all__ = [
    "DefinitionStore",
    "InstanceStore",
]

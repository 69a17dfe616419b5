"""
Request dependencies resolving the stores owned by the running app.
"""

from fastapi import Request

from stateflow.engine.executor import InstanceEngine
from stateflow.storage.memory import DefinitionStore


def get_definition_store(request: Request) -> DefinitionStore:
    return request.app.state.definitions


def get_engine(request: Request) -> InstanceEngine:
    return request.app.state.engine

"""
API package - FastAPI routes and schemas.
"""

from stateflow.api.routes import definitions, instances

__all__ = ["definitions", "instances"]

"""
StateFlow - FastAPI Application Entry Point.

A lightweight finite-state-machine workflow engine.
"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from stateflow.config import Settings, settings
from stateflow.api.routes import definitions, instances
from stateflow.engine.errors import ErrorKind, WorkflowError
from stateflow.engine.executor import InstanceEngine
from stateflow.storage.memory import DefinitionStore, InstanceStore
from stateflow.workflows.document_approval import (
    DEMO_DEFINITION_ID,
    register_document_approval_workflow,
)


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


ERROR_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ILLEGAL_OPERATION: 400,
}


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application with its own definition and instance stores.

    Args:
        app_settings: Settings to use (defaults to the environment settings)
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        logger.info(f"Starting {app_settings.APP_NAME} v{app_settings.APP_VERSION}")

        # Register the demo workflow
        if app_settings.REGISTER_DEMO_WORKFLOW:
            if await app.state.definitions.find(DEMO_DEFINITION_ID) is None:
                await register_document_approval_workflow(app.state.definitions)

        yield

        # Shutdown
        logger.info("Shutting down...")

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="""
## StateFlow API

A minimal finite-state-machine engine for document and approval style workflows.

### Concepts
- **States**: Nodes of the workflow; exactly one is initial, any may be final
- **Actions**: Named transitions from one or more states to a single target state
- **Instances**: Independent runs of a definition with a current state and history

### Quick Start
1. Create a definition: `POST /workflows/definitions`
2. Start an instance: `POST /workflows/definitions/{definition_id}/instances`
3. Execute an action: `POST /workflows/instances/{instance_id}/execute`
4. Inspect the instance: `GET /workflows/instances/{instance_id}`

### Demo Workflow
A pre-registered Document Approval workflow is available with ID: `document-approval-demo`
        """,
        version=app_settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.definitions = DefinitionStore()
    app.state.instances = InstanceStore()
    app.state.engine = InstanceEngine(app.state.definitions, app.state.instances)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(definitions.router)
    app.include_router(instances.router)

    # ============================================================
    # Root Endpoints
    # ============================================================

    @app.get("/", tags=["Root"])
    async def root():
        """API root - returns basic info and links."""
        return {
            "name": app_settings.APP_NAME,
            "version": app_settings.APP_VERSION,
            "description": "A minimal finite-state-machine workflow engine",
            "docs": "/docs",
            "redoc": "/redoc",
            "endpoints": {
                "definitions": "/workflows/definitions",
                "instances": "/workflows/instances",
                "start_instance": "/workflows/definitions/{definition_id}/instances",
                "execute_action": "/workflows/instances/{instance_id}/execute",
            },
            "demo_workflow": DEMO_DEFINITION_ID,
        }

    @app.get("/health", tags=["Root"])
    async def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": app_settings.APP_VERSION,
            "definitions_count": len(app.state.definitions),
            "instances_count": len(app.state.instances),
        }

    # ============================================================
    # Error Handlers
    # ============================================================

    @app.exception_handler(WorkflowError)
    async def workflow_exception_handler(request: Request, exc: WorkflowError):
        """Map engine errors to 400/404 responses."""
        status_code = ERROR_STATUS_CODES.get(exc.kind, 400)
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.code}: {exc.message}")
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc) if app_settings.DEBUG else "An unexpected error occurred",
            },
        )

    return app


# Create FastAPI application
app = create_app()

"""Route registration — mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from smartflow_server.routes.extraction import router as extraction_router
from smartflow_server.routes.flow import router as flow_router
from smartflow_server.routes.reference import router as reference_router
from smartflow_server.routes.validation import router as validation_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the versioned API prefix."""
    app.include_router(flow_router, prefix=API_PREFIX)
    app.include_router(extraction_router, prefix=API_PREFIX)
    app.include_router(validation_router, prefix=API_PREFIX)
    app.include_router(reference_router, prefix=API_PREFIX)

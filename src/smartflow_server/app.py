"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads rulesets and initialises the pipeline once
  - CORS middleware
  - Global exception handlers (SDK ValueError → 400/404/503, KeyError → 404,
    TranscriptionError → 502)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``smartflow-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from smartflow_rules.pipeline import SmartFlowPipeline
from smartflow_rules.ruleset import RulesetStore
from smartflow_rules.transcription import HttpTranscriptionBackend, TranscriptionError

from smartflow_server.config import ServerSettings, load_settings
from smartflow_server.errors import (
    generic_error_handler,
    key_error_handler,
    transcription_error_handler,
    value_error_handler,
)
from smartflow_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan — runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup.

    Startup:
      1. Load YAML tables into a ``RulesetStore``
      2. Build the transcription backend if a URL is configured
      3. Build ``SmartFlowPipeline`` and stash it on ``app.state``
    """
    settings: ServerSettings = app.state.settings

    # --- Load rulesets ---
    store = RulesetStore(ruleset_dir=settings.ruleset_dir)
    store.load()
    logger.info("RulesetStore loaded successfully")

    # --- Build pipeline ---
    backend = None
    if settings.transcription_url:
        backend = HttpTranscriptionBackend(
            settings.transcription_url, timeout=settings.transcription_timeout,
        )
    else:
        logger.info("TRANSCRIPTION_URL not set; /recordings is disabled")

    app.state.store = store
    app.state.pipeline = SmartFlowPipeline(store, backend=backend)

    yield

    logger.info("Shutting down")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Smart Flow API Server",
        description="REST API for consultation routing and transcript extraction",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(TranscriptionError, transcription_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health(request: Request) -> dict:
        """Readiness probe — verifies the rulesets are loaded."""
        store: RulesetStore | None = getattr(request.app.state, "store", None)
        if store is None or not store.loaded:
            return {"status": "error", "detail": "rulesets not loaded"}
        return {"status": "ok"}

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn smartflow_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``smartflow-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "smartflow_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )

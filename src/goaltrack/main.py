"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from goaltrack import __version__
from goaltrack.backend.client import create_backend
from goaltrack.config import settings
from goaltrack.logging_config import configure_logging

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=not settings.local_mode)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Install the backend client factory unless one was provided (tests)."""
    if getattr(app.state, "backend_factory", None) is None:
        app.state.backend_factory = create_backend
    logger.info("goaltrack API started (backend=%s)", settings.supabase_url)
    yield
    logger.info("goaltrack API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="goaltrack API",
        version=__version__,
        description="Goal, milestone and task tracking over a managed Supabase backend.",
        lifespan=lifespan,
    )
    app.state.backend_factory = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add middleware (order matters: last added = first executed)
    from goaltrack.api.middleware.auth import AuthMiddleware
    from goaltrack.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(AuthMiddleware)
    app.add_middleware(TraceIdMiddleware)

    from goaltrack.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from goaltrack.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()

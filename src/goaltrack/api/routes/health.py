"""Health check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from goaltrack import __version__
from goaltrack.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Return service health status."""
    return {"status": "healthy", "service": "goaltrack-api", "version": __version__}


@router.get("/health/live")
async def liveness():
    """Liveness check, always 200 while the process runs."""
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness(request: Request):
    """Readiness check: the backend client factory must be installed."""
    ready = getattr(request.app.state, "backend_factory", None) is not None
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "backend": settings.supabase_url,
            "local_mode": settings.local_mode,
        },
    )

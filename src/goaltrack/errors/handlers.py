"""Exception handlers rendering failures as the ErrorResponse envelope."""

import logging
from datetime import datetime, timezone

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from goaltrack.errors.exceptions import AuthorizationError, BackendError, GoalTrackError
from goaltrack.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def error_response(request: Request, exc: GoalTrackError) -> JSONResponse:
    envelope = ErrorResponse(
        error=ErrorDetail(
            code=exc.code,
            message=exc.message,
            details=exc.details,
            trace_id=getattr(request.state, "trace_id", "unknown"),
            timestamp=datetime.now(timezone.utc),
        ),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope.model_dump(mode="json", exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GoalTrackError)
    async def goaltrack_error_handler(request: Request, exc: GoalTrackError):
        if isinstance(exc, AuthorizationError):
            logger.warning(
                "access_denied",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "user_id": getattr(request.state, "user_id", None) or "anonymous",
                    "reason": exc.message,
                },
            )
        elif isinstance(exc, BackendError):
            logger.warning(
                "backend_call_failed",
                extra={"path": request.url.path, "reason": exc.message, "details": exc.details},
            )
        return error_response(request, exc)

    @app.exception_handler(httpx.HTTPError)
    async def transport_error_handler(request: Request, exc: httpx.HTTPError):
        # Raised outside a repository, e.g. while building the per-request client
        logger.warning("backend_unreachable", extra={"path": request.url.path, "reason": str(exc)})
        return error_response(request, BackendError.wrap("reach backend", exc))

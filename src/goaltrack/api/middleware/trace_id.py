"""Request trace id propagation.

A caller-supplied ``X-Trace-Id`` (or ``X-Request-Id``) is reused when it
fits the error envelope's 128 character limit; otherwise a fresh
``trc_`` id is generated. The id is bound to the logging context for the
duration of the request and echoed on the response.
"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from goaltrack.logging_config import bind_request_context, clear_request_context

MAX_TRACE_ID_LENGTH = 128


def new_trace_id() -> str:
    return f"trc_{uuid.uuid4().hex[:16]}"


def incoming_trace_id(request: Request) -> str | None:
    value = request.headers.get("x-trace-id") or request.headers.get("x-request-id")
    if value and len(value) <= MAX_TRACE_ID_LENGTH:
        return value
    return None


class TraceIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = incoming_trace_id(request) or new_trace_id()
        request.state.trace_id = trace_id
        bind_request_context(trace_id)
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Trace-Id"] = trace_id
        return response

"""Bearer token extraction middleware.

Tokens are not verified here; the backend's auth API resolves them in
``get_current_user`` and row-level security applies them to every query.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class AuthMiddleware(BaseHTTPMiddleware):
    """Attach the request's Bearer access token (or None) to request.state."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        auth_header = request.headers.get("authorization", "")
        token = auth_header[7:].strip() if auth_header.startswith("Bearer ") else ""
        request.state.access_token = token or None
        request.state.user_id = None
        return await call_next(request)

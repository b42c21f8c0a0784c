"""FastAPI dependency injection providers."""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from supabase import AsyncClient

from goaltrack.backend.client import close_backend
from goaltrack.errors.exceptions import AuthenticationError
from goaltrack.logging_config import bind_request_context
from goaltrack.services.access import AccessChecker
from goaltrack.services.auth_service import AuthService
from goaltrack.services.remote_functions import RemoteFunctions


async def open_backend(request: Request) -> AsyncClient:
    """Backend client acting as the request's user (anonymous without a token).

    The caller owns the client and must pass it to ``close_backend``.
    """
    factory = request.app.state.backend_factory
    return await factory(getattr(request.state, "access_token", None))


async def get_backend(request: Request) -> AsyncGenerator[AsyncClient, None]:
    """Per-request backend client, closed once the request is done with it."""
    client = await open_backend(request)
    try:
        yield client
    finally:
        await close_backend(client)


def get_trace_id(request: Request) -> str:
    """Extract trace_id from request state (set by middleware)."""
    return getattr(request.state, "trace_id", "unknown")


async def get_current_user(
    request: Request, client: Annotated[AsyncClient, Depends(get_backend)]
) -> dict:
    """Return the authenticated user dict or raise 401."""
    token = getattr(request.state, "access_token", None)
    if not token:
        raise AuthenticationError("Authentication required")
    user = await AuthService(client).get_user(token)
    request.state.user_id = user["id"]
    bind_request_context(get_trace_id(request), user_id=user["id"])
    return user


def get_access(client: Annotated[AsyncClient, Depends(get_backend)]) -> AccessChecker:
    return AccessChecker(client)


def get_functions(client: Annotated[AsyncClient, Depends(get_backend)]) -> RemoteFunctions:
    return RemoteFunctions(client)


# Type aliases for dependency injection
Backend = Annotated[AsyncClient, Depends(get_backend)]
TraceId = Annotated[str, Depends(get_trace_id)]
CurrentUser = Annotated[dict, Depends(get_current_user)]
Access = Annotated[AccessChecker, Depends(get_access)]
Functions = Annotated[RemoteFunctions, Depends(get_functions)]

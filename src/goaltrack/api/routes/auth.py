"""Sign-in, sign-up and session endpoints."""

from typing import Any

from fastapi import APIRouter, Header, Request

from goaltrack.dependencies import Backend, CurrentUser
from goaltrack.errors.exceptions import AuthenticationError
from goaltrack.models.user import OAuthRequest, PasswordReset, PasswordUpdate, SignInRequest, SignUpRequest
from goaltrack.services.auth_service import AuthService, check_password
from goaltrack.state.session import SessionStore

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/sign-in")
async def sign_in(body: SignInRequest, client: Backend) -> dict:
    return await AuthService(client).sign_in(body.email, body.password)


@router.post("/sign-up", status_code=201)
async def sign_up(body: SignUpRequest, client: Backend) -> dict:
    return await AuthService(client).sign_up(body.email, body.password, body.metadata)


@router.post("/sign-out", status_code=204)
async def sign_out(client: Backend, user: CurrentUser) -> None:
    await AuthService(client).sign_out()


@router.post("/oauth")
async def sign_in_with_provider(body: OAuthRequest, client: Backend) -> dict:
    url = await AuthService(client).sign_in_with_provider(body.provider, body.redirect_to)
    return {"provider": str(body.provider), "url": url}


@router.post("/password-reset", status_code=202)
async def reset_password(body: PasswordReset, client: Backend) -> dict:
    await AuthService(client).reset_password(body.email)
    return {"status": "sent"}


async def _user_session(request: Request, client, refresh_token: str | None) -> AuthService:
    if not refresh_token:
        raise AuthenticationError("X-Refresh-Token header required")
    auth = AuthService(client)
    await auth.use_session(request.state.access_token, refresh_token)
    return auth


@router.put("/password")
async def update_password(
    body: PasswordUpdate,
    request: Request,
    client: Backend,
    user: CurrentUser,
    x_refresh_token: str | None = Header(None),
) -> dict:
    check_password(body.password)
    auth = await _user_session(request, client, x_refresh_token)
    return {"user": await auth.update_password(body.password)}


@router.patch("/profile")
async def update_profile(
    body: dict[str, Any],
    request: Request,
    client: Backend,
    user: CurrentUser,
    x_refresh_token: str | None = Header(None),
) -> dict:
    auth = await _user_session(request, client, x_refresh_token)
    return {"user": await auth.update_profile(body)}


@router.get("/me")
async def me(user: CurrentUser) -> dict:
    return user


@router.get("/session")
async def session(client: Backend, user: CurrentUser) -> dict:
    """Everything loaded for the signed-in user: profile, plan, organizations, workspaces, access."""
    store = SessionStore(client)
    snapshot = await store.load(user)
    return snapshot.model_dump(mode="json")

"""Authentication flows over the backend's auth API."""

import asyncio
import logging
from typing import Any

import httpx
from supabase import AsyncClient, AuthApiError, AuthError

from goaltrack.config import settings
from goaltrack.errors.exceptions import AuthenticationError, BackendError, ValidationError
from goaltrack.models.common import utcnow
from goaltrack.models.enums import OAuthProvider

logger = logging.getLogger(__name__)

AUTH_ERRORS: tuple[type[Exception], ...] = (AuthError, httpx.HTTPError)


def dump(obj: Any) -> dict | None:
    """Serialize an auth library model (user, session) to a JSON-safe dict."""
    if obj is None:
        return None
    return obj.model_dump(mode="json")


def check_password(password: str) -> None:
    if len(password) < settings.min_password_length:
        raise ValidationError(
            f"Password must be at least {settings.min_password_length} characters"
        )


class AuthService:
    def __init__(self, client: AsyncClient, sleep=asyncio.sleep):
        self.client = client
        self._sleep = sleep

    async def get_session(self) -> dict | None:
        try:
            session = await self.client.auth.get_session()
        except AUTH_ERRORS as exc:
            raise BackendError.wrap("fetch session", exc) from exc
        return dump(session)

    async def use_session(self, access_token: str, refresh_token: str) -> dict | None:
        """Adopt an existing session so user-scoped auth calls act on it."""
        try:
            response = await self.client.auth.set_session(access_token, refresh_token)
        except AuthApiError as exc:
            raise AuthenticationError(exc.message) from exc
        except AUTH_ERRORS as exc:
            raise BackendError.wrap("restore session", exc) from exc
        return dump(response.session)

    async def refresh_session(self, retries: int | None = None) -> dict | None:
        """Fetch the session, retrying with exponential backoff.

        Waits ``backoff * 2**attempt`` seconds after each failed attempt and
        raises the last failure once ``retries`` retries are used up.
        """
        retries = settings.session_refresh_retries if retries is None else retries
        for attempt in range(retries + 1):
            try:
                return await self.get_session()
            except BackendError as exc:
                if attempt >= retries:
                    logger.warning("Session refresh gave up after %d attempts: %s", attempt + 1, exc.message)
                    raise
                delay = settings.session_refresh_backoff_seconds * 2**attempt
                logger.info("Session refresh failed, retrying in %.1fs", delay)
                await self._sleep(delay)
        return None

    async def sign_in(self, email: str, password: str) -> dict:
        try:
            response = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthApiError as exc:
            raise AuthenticationError(exc.message) from exc
        except AUTH_ERRORS as exc:
            raise BackendError.wrap("sign in", exc) from exc
        logger.info("User signed in")
        return {"user": dump(response.user), "session": dump(response.session)}

    async def sign_up(self, email: str, password: str, metadata: dict[str, Any] | None = None) -> dict:
        data = {**(metadata or {}), "default_role": "user", "created_at": utcnow().isoformat()}
        try:
            response = await self.client.auth.sign_up(
                {"email": email, "password": password, "options": {"data": data}}
            )
        except AUTH_ERRORS as exc:
            raise BackendError.wrap("sign up", exc) from exc
        return {"user": dump(response.user), "session": dump(response.session)}

    async def sign_out(self) -> None:
        try:
            await self.client.auth.sign_out()
        except AUTH_ERRORS as exc:
            raise BackendError.wrap("sign out", exc) from exc

    async def sign_in_with_provider(self, provider: OAuthProvider, redirect_to: str | None = None) -> str:
        """Start an OAuth sign-in and return the provider URL to redirect to."""
        try:
            response = await self.client.auth.sign_in_with_oauth(
                {
                    "provider": str(provider),
                    "options": {"redirect_to": redirect_to or settings.oauth_redirect_url},
                }
            )
        except AUTH_ERRORS as exc:
            raise BackendError.wrap(f"sign in with {provider}", exc) from exc
        return response.url

    async def update_password(self, password: str) -> dict | None:
        check_password(password)
        try:
            response = await self.client.auth.update_user({"password": password})
        except AUTH_ERRORS as exc:
            raise BackendError.wrap("update password", exc) from exc
        return dump(response.user)

    async def reset_password(self, email: str) -> None:
        try:
            await self.client.auth.reset_password_for_email(
                email, {"redirect_to": settings.password_reset_redirect_url}
            )
        except AUTH_ERRORS as exc:
            raise BackendError.wrap("send password reset", exc) from exc

    async def update_profile(self, data: dict[str, Any]) -> dict | None:
        try:
            response = await self.client.auth.update_user({"data": data})
        except AUTH_ERRORS as exc:
            raise BackendError.wrap("update profile", exc) from exc
        return dump(response.user)

    async def get_user(self, access_token: str) -> dict:
        """Resolve an access token to its user or raise AuthenticationError."""
        try:
            response = await self.client.auth.get_user(access_token)
        except AuthApiError as exc:
            raise AuthenticationError("Invalid or expired token") from exc
        except AUTH_ERRORS as exc:
            raise BackendError.wrap("fetch user", exc) from exc
        if response is None or response.user is None:
            raise AuthenticationError("Invalid or expired token")
        return dump(response.user)

"""Pydantic models for auth requests and the session snapshot."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from goaltrack.models.enums import OAuthProvider
from goaltrack.models.team import TeamAccess


class SignInRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)


class SignUpRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)
    metadata: dict[str, Any] = Field(default_factory=dict)


class OAuthRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    provider: OAuthProvider
    redirect_to: str | None = None


class PasswordUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    password: str


class PasswordReset(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=3, max_length=320)


class SessionSnapshot(BaseModel):
    """What the session store knows about the signed-in user."""

    user: dict[str, Any] | None = None
    user_details: dict[str, Any] | None = None
    subscription: dict[str, Any] | None = None
    organizations: list[dict[str, Any]] = Field(default_factory=list)
    workspaces: list[dict[str, Any]] = Field(default_factory=list)
    team_access: list[TeamAccess] = Field(default_factory=list)
    loading: bool = False
    error: str | None = None

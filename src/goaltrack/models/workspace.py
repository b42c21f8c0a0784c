"""Pydantic models for organizations and workspaces."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from goaltrack.models.common import Row, Timestamp


class Organization(Row):
    id: str
    name: str = ""
    subscription_plan: str = "free"
    is_active: bool = True
    settings: dict[str, Any] | None = None
    user_id: str | None = None
    created_at: Timestamp | None = None


class Workspace(Row):
    id: str
    name: str = ""
    organization_id: str | None = None
    is_active: bool = True
    settings: dict[str, Any] | None = None
    created_at: Timestamp | None = None


class OrganizationCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=200)
    subscription_plan: str = "free"


class WorkspaceCreate(BaseModel):
    """New workspace; without an organization one is created alongside it."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=200)
    organization_id: str | None = None

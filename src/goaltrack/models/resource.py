"""Pydantic models for resources (uploaded files and links)."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from goaltrack.models.common import Row, Timestamp, id_list
from goaltrack.models.enums import ResourceType


class Resource(Row):
    id: str
    title: str = Field("", validation_alias=AliasChoices("title", "name"))
    type: ResourceType
    description: str | None = None
    link: str | None = Field(None, validation_alias=AliasChoices("link", "location", "url"))
    target_type: str | None = None
    target_id: str | None = None
    organization_id: str | None = None
    creator_id: str | None = Field(None, validation_alias=AliasChoices("creator_id", "added_by"))
    milestone_id: str | None = None
    task_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    size: int | None = None
    mime_type: str | None = None
    created_at: Timestamp | None = None

    coerce_tags = field_validator("tags", mode="before")(id_list)


class ResourceFilters(BaseModel):
    """Filter set for resource lists; ``type=None`` matches every type."""

    type: ResourceType | None = None
    search: str | None = None
    tags: list[str] = Field(default_factory=list)
    milestone_id: str | None = None
    task_id: str | None = None
    added_by: str | None = None


class ResourceCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    organization_id: str
    target_type: str = Field(..., pattern=r"^(workspace|goal|milestone|task)$")
    target_id: str
    title: str = Field(..., min_length=1, max_length=300)
    type: ResourceType
    link: str | None = None
    size: int | None = Field(None, ge=0)
    mime_type: str | None = None
    tags: list[str] = Field(default_factory=list)
    visibility: str = Field("team", pattern=r"^(public|private|team|organization)$")
    metadata: dict[str, Any] = Field(default_factory=dict)


class ResourceUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=300)
    tags: list[str] | None = None
    visibility: str | None = Field(None, pattern=r"^(public|private|team|organization)$")
    metadata: dict[str, Any] | None = None

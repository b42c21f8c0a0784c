"""Pydantic models for the activity feed: updates, comments, reactions, notifications."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from goaltrack.models.common import Row, Timestamp, empty_if_none
from goaltrack.models.enums import UpdateType


class Update(Row):
    id: str
    creator_id: str | None = None
    target_id: str
    type: UpdateType
    payload: dict[str, Any] | None = None
    mentions: list[str] = Field(default_factory=list)
    created_at: Timestamp | None = None

    coerce_mentions = field_validator("mentions", mode="before")(empty_if_none)


class Comment(Row):
    id: str
    update_id: str | None = None
    author_id: str | None = None
    content: str = ""
    mentions: list[str] = Field(default_factory=list)
    reactions: dict[str, list[str]] = Field(default_factory=dict)
    edited_at: Timestamp | None = None
    created_at: Timestamp | None = None

    coerce_mentions = field_validator("mentions", mode="before")(empty_if_none)

    @field_validator("reactions", mode="before")
    @classmethod
    def coerce_reactions(cls, value):
        return {} if value is None else value


class Notification(Row):
    id: str
    user_id: str
    type: str
    title: str = ""
    content: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    is_read: bool = False
    created_at: Timestamp | None = None


class UpdateCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: UpdateType
    payload: dict[str, Any] = Field(default_factory=dict)


class CommentCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., min_length=1, max_length=10000)


class ReactionToggle(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reaction: str = Field(..., min_length=1, max_length=32)

"""Pydantic models for goals and goal connections."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from goaltrack.models.common import Row, Timestamp, empty_if_none
from goaltrack.models.enums import ConnectionStatus, ConnectionStrength, GoalStatus, GoalType


class GoalConnection(Row):
    id: str | None = None
    source_goal_id: str | None = None
    target_goal_id: str
    status: ConnectionStatus | None = None
    strength: ConnectionStrength | None = None
    description: str | None = None


class Goal(Row):
    id: str
    workspace_id: str | None = None
    title: str = ""
    description: str | None = None
    type: GoalType
    status: GoalStatus = GoalStatus.ACTIVE
    progress: float = 0
    level: int = 0
    parent_goal_id: str | None = None
    start_date: Timestamp | None = None
    end_date: Timestamp | None = None
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None
    connections: list[GoalConnection] = Field(default_factory=list)

    coerce_connections = field_validator("connections", mode="before")(empty_if_none)


class GoalCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    workspace_id: str
    title: str = Field(..., min_length=1, max_length=200)
    type: GoalType
    description: str | None = Field(None, max_length=5000)
    status: GoalStatus = GoalStatus.DRAFT
    parent_goal_id: str | None = None
    config_id: str | None = None
    start_date: Timestamp | None = None
    end_date: Timestamp | None = None


class GoalUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=200)
    type: GoalType | None = None
    description: str | None = Field(None, max_length=5000)
    status: GoalStatus | None = None
    parent_goal_id: str | None = None
    start_date: Timestamp | None = None
    end_date: Timestamp | None = None


class ProgressUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    progress: float = Field(..., ge=0, le=100)

"""Pydantic models for milestones."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from goaltrack.models.common import Row, Timestamp
from goaltrack.models.enums import GoalStatus


class Milestone(Row):
    id: str
    goal_id: str | None = None
    title: str = ""
    description: str | None = None
    status: GoalStatus = GoalStatus.ACTIVE
    due_date: Timestamp | None = Field(
        None, validation_alias=AliasChoices("due_date", "target_date", "date")
    )
    start_date: Timestamp | None = None
    is_critical: bool = False
    position: int = 0

    @property
    def completed(self) -> bool:
        return self.status == GoalStatus.COMPLETED or bool((self.model_extra or {}).get("completed"))


class MilestoneCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    goal_id: str
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    status: GoalStatus = GoalStatus.ACTIVE
    due_date: Timestamp | None = None
    start_date: Timestamp | None = None
    is_critical: bool = False
    position: int = 0


class MilestoneUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    status: GoalStatus | None = None
    due_date: Timestamp | None = None
    start_date: Timestamp | None = None
    is_critical: bool | None = None
    position: int | None = None

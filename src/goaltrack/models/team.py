"""Pydantic models for team assignments (role grants on polymorphic resources)."""

from pydantic import BaseModel, ConfigDict, Field

from goaltrack.models.common import Row, Timestamp
from goaltrack.models.enums import AssignableType, TeamRole


class TeamAssignment(Row):
    id: str | None = None
    user_id: str | None = None
    assignable_type: AssignableType
    assignable_id: str
    role: TeamRole = TeamRole.MEMBER
    created_at: Timestamp | None = None


class TeamAccess(BaseModel):
    role: TeamRole
    resource_type: AssignableType
    resource_id: str

    @classmethod
    def from_assignment(cls, row: dict) -> "TeamAccess":
        assignment = TeamAssignment.model_validate(row)
        return cls(
            role=assignment.role,
            resource_type=assignment.assignable_type,
            resource_id=assignment.assignable_id,
        )


class TeamMember(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: str
    role: TeamRole


class GoalTeamUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    assignments: list[TeamMember] = Field(default_factory=list)

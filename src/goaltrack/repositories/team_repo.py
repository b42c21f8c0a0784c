"""Team assignment repository."""

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.models.enums import AssignableType, TeamRole
from goaltrack.models.team import TeamMember
from goaltrack.repositories.base import BaseRepository


class TeamAssignmentRepository(BaseRepository):
    entity = "team assignment"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.TEAM_ASSIGNMENTS)

    async def list_for(self, assignable_type: AssignableType, assignable_id: str) -> list[dict]:
        builder = (
            self.query()
            .select("*")
            .eq("assignable_type", str(assignable_type))
            .eq("assignable_id", assignable_id)
        )
        return await self.run("fetch team assignments", builder) or []

    async def list_for_user(self, user_id: str) -> list[dict]:
        return await self.list_by_field("user_id", user_id, order_by=None)

    async def assign(
        self,
        user_id: str,
        assignable_type: AssignableType,
        assignable_id: str,
        role: TeamRole = TeamRole.OWNER,
    ) -> dict:
        return await self.create(
            {
                "user_id": user_id,
                "assignable_type": str(assignable_type),
                "assignable_id": assignable_id,
                "role": str(role),
            }
        )

    async def replace_goal_team(self, goal_id: str, members: list[TeamMember]) -> list[dict]:
        """Drop every non-owner assignment on the goal, then insert ``members``."""
        builder = (
            self.query()
            .delete()
            .eq("assignable_type", str(AssignableType.GOAL))
            .eq("assignable_id", goal_id)
            .neq("role", str(TeamRole.OWNER))
        )
        await self.run("update goal team", builder)
        return await self.create_many(
            [
                {
                    "user_id": m.user_id,
                    "assignable_type": str(AssignableType.GOAL),
                    "assignable_id": goal_id,
                    "role": str(m.role),
                }
                for m in members
            ]
        )

    async def role_of(
        self, user_id: str, assignable_type: AssignableType, assignable_id: str
    ) -> TeamRole | None:
        builder = (
            self.query()
            .select("role")
            .eq("user_id", user_id)
            .eq("assignable_type", str(assignable_type))
            .eq("assignable_id", assignable_id)
            .limit(1)
        )
        rows = await self.run("fetch team role", builder)
        return TeamRole(rows[0]["role"]) if rows else None

"""Milestone repository."""

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.models.enums import TaskStatus
from goaltrack.repositories.base import BaseRepository
from goaltrack.services.calculations.task_metrics import percent


class MilestoneRepository(BaseRepository):
    entity = "milestone"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.MILESTONES)

    async def get(self, milestone_id: str) -> dict | None:
        return await self.get_by_id(milestone_id)

    async def list_by_goal(self, goal_id: str) -> list[dict]:
        """Milestones of a goal, earliest due date first."""
        return await self.list_by_field("goal_id", goal_id, order_by="due_date", desc=False)

    async def recalculate_progress(self, milestone_id: str) -> float:
        """Store the share of the milestone's tasks that are completed (0 with no tasks)."""
        tasks = await self.run(
            "fetch milestone tasks",
            self.client.table(Tables.TASKS).select("status").eq("milestone_id", milestone_id),
        ) or []
        completed = sum(1 for t in tasks if t.get("status") == TaskStatus.COMPLETED)
        progress = percent(completed, len(tasks))
        await self.update(milestone_id, {"progress": progress})
        return progress

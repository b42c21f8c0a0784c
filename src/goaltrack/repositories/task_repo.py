"""Task repository."""

from typing import Any

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import ValidationError
from goaltrack.models.enums import TaskStatus
from goaltrack.repositories.base import BaseRepository
from goaltrack.repositories.goal_repo import check_progress

TASK_WITH_ITEMS = "*, subtasks(*), checklist_items(*)"


class TaskRepository(BaseRepository):
    entity = "task"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.TASKS)

    async def get(self, task_id: str) -> dict | None:
        return await self.get_by_id(task_id, TASK_WITH_ITEMS)

    async def list_by_milestone(self, milestone_id: str) -> list[dict]:
        return await self.list_by_field("milestone_id", milestone_id)

    async def list_by_goal(self, goal_id: str) -> list[dict]:
        """Tasks of a goal with their subtasks and checklist items embedded."""
        return await self.list_by_field("goal_id", goal_id, columns=TASK_WITH_ITEMS)

    async def create(self, values: dict[str, Any]) -> dict:
        if not values.get("title") or not values.get("goal_id"):
            raise ValidationError("Title and goal_id are required")
        return await super().create(values)

    async def update_progress(self, task_id: str, progress: float) -> dict:
        check_progress(progress)
        return await self.update(task_id, {"progress": progress})

    async def bulk_update_status(self, task_ids: list[str], status: TaskStatus) -> list[dict]:
        builder = self.query().update({"status": str(status)}).in_("id", task_ids)
        return await self.run("update tasks", builder) or []

    async def list_with_dependencies(self, goal_id: str) -> list[dict]:
        return await self.rpc(
            "fetch task dependencies", "get_tasks_with_dependencies", {"p_goal_id": goal_id}
        ) or []

"""Goal and goal connection repositories."""

from typing import Any

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import ValidationError
from goaltrack.models.enums import STORE_GOAL_TYPES, GoalType
from goaltrack.repositories.base import BaseRepository


def check_progress(progress: float) -> None:
    if not 0 <= progress <= 100:
        raise ValidationError("Progress must be between 0 and 100", {"progress": progress})


def to_store(values: dict[str, Any]) -> dict[str, Any]:
    if values.get("type"):
        return {**values, "type": GoalType(values["type"]).stored}
    return values


def from_store(row: dict | None) -> dict | None:
    if row and row.get("type") in STORE_GOAL_TYPES:
        return {**row, "type": STORE_GOAL_TYPES[row["type"]].value}
    return row


class GoalRepository(BaseRepository):
    """Goals, with the API's goal type names translated to the store's enum."""

    entity = "goal"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.GOALS)

    async def get_by_id(self, record_id: str, columns: str = "*") -> dict | None:
        return from_store(await super().get_by_id(record_id, columns))

    async def list_by_field(self, field: str, value: Any, **kwargs) -> list[dict]:
        return [from_store(row) for row in await super().list_by_field(field, value, **kwargs)]

    async def create(self, values: dict[str, Any]) -> dict:
        return from_store(await super().create(to_store(values)))

    async def update(self, record_id: str, values: dict[str, Any]) -> dict:
        return from_store(await super().update(record_id, to_store(values)))

    async def get(self, goal_id: str) -> dict | None:
        return await self.get_by_id(goal_id)

    async def list_by_workspace(self, workspace_id: str) -> list[dict]:
        """Goals of a workspace, newest first."""
        return await self.list_by_field("workspace_id", workspace_id)

    async def update_progress(self, goal_id: str, progress: float) -> dict:
        check_progress(progress)
        return await self.update(goal_id, {"progress": progress})

    async def calculate_progress(self, goal_id: str) -> Any:
        return await self.rpc("calculate goal progress", "calculate_goal_progress", {"p_goal_id": goal_id})


class GoalConnectionRepository(BaseRepository):
    entity = "goal connection"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.GOAL_CONNECTIONS)

    async def list_for_goals(self, goal_ids: list[str]) -> list[dict]:
        """Outgoing connections of every goal in ``goal_ids``."""
        if not goal_ids:
            return []
        builder = self.query().select("*").in_("source_goal_id", goal_ids)
        return await self.run("fetch goal connections", builder) or []

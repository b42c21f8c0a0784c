"""Repositories for automations and their run history."""

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.repositories.base import BaseRepository


class AutomationRepository(BaseRepository):
    entity = "automation"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.AUTOMATIONS)

    async def get(self, automation_id: str) -> dict | None:
        return await self.get_by_id(automation_id)

    async def list_by_workspace(self, workspace_id: str) -> list[dict]:
        return await self.list_by_field("workspace_id", workspace_id)

    async def list_runs(self, automation_id: str) -> list[dict]:
        """Run history of an automation, newest first."""
        builder = (
            self.client.table(Tables.AUTOMATION_RUNS)
            .select("*")
            .eq("automation_id", automation_id)
            .order("created_at", desc=True)
        )
        return await self.run("fetch automation history", builder) or []

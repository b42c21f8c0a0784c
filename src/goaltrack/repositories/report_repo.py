"""Report repository."""

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.repositories.base import BaseRepository


class ReportRepository(BaseRepository):
    entity = "report"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.REPORTS)

    async def get(self, report_id: str) -> dict | None:
        return await self.get_by_id(report_id)

    async def list_by_workspace(self, workspace_id: str) -> list[dict]:
        return await self.list_by_field("workspace_id", workspace_id)

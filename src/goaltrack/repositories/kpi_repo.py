"""KPI and KPI history repositories."""

from datetime import datetime

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.repositories.base import BaseRepository


class KPIRepository(BaseRepository):
    entity = "kpi"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.KPIS)

    async def get(self, kpi_id: str) -> dict | None:
        return await self.get_by_id(kpi_id)

    async def list_by_goal(self, goal_id: str) -> list[dict]:
        """KPIs of a goal with their recorded history embedded."""
        return await self.list_by_field(
            "goal_id", goal_id, columns="*, history:kpi_history(value, target, recorded_at)"
        )

    async def record_value(self, kpi_id: str, value: float, target: float) -> dict:
        rows = await self.run(
            "record kpi value",
            self.client.table(Tables.KPI_HISTORY).insert(
                {"kpi_id": kpi_id, "value": value, "target": target}
            ),
        )
        return rows[0] if rows else {}

    async def history(self, kpi_id: str, since: datetime) -> list[dict]:
        builder = (
            self.client.table(Tables.KPI_HISTORY)
            .select("*")
            .eq("kpi_id", kpi_id)
            .gte("recorded_at", since.isoformat())
            .order("recorded_at")
        )
        return await self.run("fetch kpi history", builder) or []

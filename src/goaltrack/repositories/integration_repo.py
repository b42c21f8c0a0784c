"""Integration repository."""

from typing import Any

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import BackendError
from goaltrack.models.common import utcnow
from goaltrack.repositories.base import BaseRepository


class IntegrationRepository(BaseRepository):
    entity = "integration"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.INTEGRATIONS)

    async def get(self, integration_id: str) -> dict | None:
        return await self.get_by_id(integration_id)

    async def list_by_workspace(self, workspace_id: str) -> list[dict]:
        return await self.list_by_field("workspace_id", workspace_id, order_by=None)

    async def configure(self, workspace_id: str, values: dict[str, Any]) -> dict:
        """Insert or replace the workspace's integration for a provider."""
        row = {**values, "workspace_id": workspace_id, "updated_at": utcnow().isoformat()}
        rows = await self.run(
            "configure integration",
            self.query().upsert(row, on_conflict="workspace_id,provider"),
        )
        if not rows:
            raise BackendError("Failed to configure integration: no data returned")
        return rows[0]

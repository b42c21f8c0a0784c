"""Workspace and organization repositories."""

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.repositories.base import BaseRepository

WORKSPACE_OVERVIEW = (
    "id, name, settings, is_active, created_at, "
    "organization:organizations(id, name, subscription_plan), "
    "team_assignments(role, user_id)"
)


class WorkspaceRepository(BaseRepository):
    entity = "workspace"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.WORKSPACES)

    async def get(self, workspace_id: str) -> dict | None:
        return await self.get_by_id(workspace_id)

    async def list_by_owner(self, user_id: str) -> list[dict]:
        return await self.list_by_field("owner_id", user_id, order_by=None)

    async def list_by_organization(self, organization_id: str) -> list[dict]:
        return await self.list_by_field("organization_id", organization_id, order_by=None)

    async def list_by_ids(self, workspace_ids: list[str]) -> list[dict]:
        if not workspace_ids:
            return []
        builder = self.query().select("*").in_("id", workspace_ids)
        return await self.run("fetch workspaces", builder) or []

    async def list_active(self) -> list[dict]:
        """Active workspaces visible to the caller with organization and team embedded."""
        builder = (
            self.query()
            .select(WORKSPACE_OVERVIEW)
            .eq("is_active", True)
            .order("created_at", desc=True)
        )
        return await self.run("fetch workspaces", builder) or []


class OrganizationRepository(BaseRepository):
    entity = "organization"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.ORGANIZATIONS)

    async def get(self, organization_id: str) -> dict | None:
        return await self.get_by_id(organization_id)

    async def list_by_ids(self, organization_ids: list[str]) -> list[dict]:
        if not organization_ids:
            return []
        builder = self.query().select("*").in_("id", organization_ids)
        return await self.run("fetch organizations", builder) or []

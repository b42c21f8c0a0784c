"""Organization and workspace creation with owner assignment."""

import logging

from supabase import AsyncClient

from goaltrack.errors.exceptions import BackendError
from goaltrack.models.enums import AssignableType, TeamRole
from goaltrack.repositories.team_repo import TeamAssignmentRepository
from goaltrack.repositories.workspace_repo import OrganizationRepository, WorkspaceRepository

logger = logging.getLogger(__name__)


class Provisioner:
    """Creates organizations and workspaces and makes the creator their owner."""

    def __init__(self, client: AsyncClient):
        self.organizations = OrganizationRepository(client)
        self.workspaces = WorkspaceRepository(client)
        self.team = TeamAssignmentRepository(client)

    async def create_organization(
        self, name: str, user_id: str, subscription_plan: str = "free"
    ) -> dict:
        org = await self.organizations.create(
            {"name": name, "user_id": user_id, "subscription_plan": subscription_plan}
        )
        try:
            await self.team.assign(user_id, AssignableType.ORGANIZATION, org["id"], TeamRole.OWNER)
        except BackendError as exc:
            logger.warning("Owner assignment failed, removing organization %s", org["id"])
            await self.organizations.delete(org["id"])
            reason = exc.message.removeprefix("Failed to create team assignment: ")
            raise BackendError(f"Failed to set organization ownership: {reason}", exc.details) from exc
        return org

    async def create_workspace(self, name: str, user_id: str, organization_id: str) -> dict:
        logger.info("Creating workspace %r in organization %s", name, organization_id)
        workspace = await self.workspaces.create(
            {"name": name, "organization_id": organization_id, "settings": {}, "is_active": True}
        )
        await self.team.assign(user_id, AssignableType.WORKSPACE, workspace["id"], TeamRole.OWNER)
        return workspace

    async def create_workspace_with_org(self, name: str, user_id: str) -> dict:
        """New workspace inside a fresh free-plan organization named after it."""
        org = await self.organizations.create(
            {"name": f"{name}'s Organization", "user_id": user_id, "subscription_plan": "free"}
        )
        workspace = await self.workspaces.create(
            {"name": name, "organization_id": org["id"], "settings": {}, "is_active": True}
        )
        await self.team.assign(user_id, AssignableType.ORGANIZATION, org["id"], TeamRole.OWNER)
        await self.team.assign(user_id, AssignableType.WORKSPACE, workspace["id"], TeamRole.OWNER)
        logger.info("Workspace %s created with organization %s", workspace["id"], org["id"])
        return workspace

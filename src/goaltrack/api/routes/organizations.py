"""Organization API routes."""

from fastapi import APIRouter

from goaltrack.dependencies import Access, Backend, CurrentUser
from goaltrack.errors.exceptions import NotFoundError
from goaltrack.models.enums import AssignableType
from goaltrack.models.workspace import OrganizationCreate
from goaltrack.repositories.workspace_repo import OrganizationRepository, WorkspaceRepository
from goaltrack.services.access import OWNERS
from goaltrack.services.provisioning import Provisioner
from goaltrack.state.session import SessionStore

router = APIRouter(tags=["Organizations"])


@router.get("/organizations")
async def list_organizations(client: Backend, user: CurrentUser) -> list[dict]:
    """Organizations the caller holds any role on."""
    return await SessionStore(client).user_organizations(user["id"])


@router.post("/organizations", status_code=201)
async def create_organization(body: OrganizationCreate, client: Backend, user: CurrentUser) -> dict:
    return await Provisioner(client).create_organization(body.name, user["id"], body.subscription_plan)


@router.get("/organizations/{organization_id}")
async def get_organization(organization_id: str, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.ORGANIZATION, organization_id)
    org = await OrganizationRepository(client).get(organization_id)
    if org is None:
        raise NotFoundError("Organization", organization_id)
    return org


@router.get("/organizations/{organization_id}/workspaces")
async def list_organization_workspaces(
    organization_id: str, client: Backend, user: CurrentUser, access: Access
) -> list[dict]:
    await access.check(AssignableType.ORGANIZATION, organization_id)
    return await WorkspaceRepository(client).list_by_organization(organization_id)


@router.delete("/organizations/{organization_id}", status_code=204)
async def delete_organization(
    organization_id: str, client: Backend, user: CurrentUser, access: Access
) -> None:
    await access.check(AssignableType.ORGANIZATION, organization_id, OWNERS)
    await OrganizationRepository(client).delete(organization_id)

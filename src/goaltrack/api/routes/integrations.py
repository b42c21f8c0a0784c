"""Third-party integration routes (GitHub, Jira, Slack and friends)."""

from fastapi import APIRouter

from goaltrack.dependencies import Access, Backend, CurrentUser, Functions
from goaltrack.models.automation import IntegrationConfig
from goaltrack.models.enums import AssignableType
from goaltrack.repositories.integration_repo import IntegrationRepository
from goaltrack.services.access import MANAGERS

router = APIRouter(tags=["Integrations"])


@router.get("/workspaces/{workspace_id}/integrations")
async def list_integrations(workspace_id: str, client: Backend, user: CurrentUser, access: Access) -> list[dict]:
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await IntegrationRepository(client).list_by_workspace(workspace_id)


@router.put("/workspaces/{workspace_id}/integrations")
async def configure_integration(
    workspace_id: str, body: IntegrationConfig, client: Backend, user: CurrentUser, access: Access
) -> dict:
    await access.check(AssignableType.WORKSPACE, workspace_id, MANAGERS)
    return await IntegrationRepository(client).configure(workspace_id, body.model_dump(exclude_none=True))


@router.post("/integrations/{integration_id}/sync", status_code=202)
async def sync_integration(
    integration_id: str, client: Backend, user: CurrentUser, access: Access, functions: Functions
):
    integration = await IntegrationRepository(client).get_or_404(integration_id)
    await access.check(AssignableType.WORKSPACE, integration["workspace_id"])
    return await functions.sync_integration(integration_id)


@router.delete("/integrations/{integration_id}", status_code=204)
async def delete_integration(integration_id: str, client: Backend, user: CurrentUser, access: Access) -> None:
    repo = IntegrationRepository(client)
    integration = await repo.get_or_404(integration_id)
    await access.check(AssignableType.WORKSPACE, integration["workspace_id"], MANAGERS)
    await repo.delete(integration_id)

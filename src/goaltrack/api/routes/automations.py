"""Workspace automation routes."""

from fastapi import APIRouter

from goaltrack.dependencies import Access, Backend, CurrentUser, Functions
from goaltrack.models.automation import AutomationCreate, AutomationUpdate
from goaltrack.models.enums import AssignableType
from goaltrack.repositories.automation_repo import AutomationRepository
from goaltrack.services.access import MANAGERS

router = APIRouter(tags=["Automations"])


@router.get("/workspaces/{workspace_id}/automations")
async def list_automations(workspace_id: str, client: Backend, user: CurrentUser, access: Access) -> list[dict]:
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await AutomationRepository(client).list_by_workspace(workspace_id)


@router.post("/automations", status_code=201)
async def create_automation(body: AutomationCreate, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.WORKSPACE, body.workspace_id, MANAGERS)
    values = {**body.model_dump(mode="json"), "creator_id": user["id"]}
    return await AutomationRepository(client).create(values)


@router.patch("/automations/{automation_id}")
async def update_automation(
    automation_id: str, body: AutomationUpdate, client: Backend, user: CurrentUser, access: Access
) -> dict:
    repo = AutomationRepository(client)
    automation = await repo.get_or_404(automation_id)
    await access.check(AssignableType.WORKSPACE, automation["workspace_id"], MANAGERS)
    return await repo.update(automation_id, body.model_dump(mode="json", exclude_unset=True))


@router.delete("/automations/{automation_id}", status_code=204)
async def delete_automation(automation_id: str, client: Backend, user: CurrentUser, access: Access) -> None:
    repo = AutomationRepository(client)
    automation = await repo.get_or_404(automation_id)
    await access.check(AssignableType.WORKSPACE, automation["workspace_id"], MANAGERS)
    await repo.delete(automation_id)


@router.post("/automations/{automation_id}/execute", status_code=202)
async def execute_automation(
    automation_id: str, client: Backend, user: CurrentUser, access: Access, functions: Functions
):
    automation = await AutomationRepository(client).get_or_404(automation_id)
    await access.check(AssignableType.WORKSPACE, automation["workspace_id"], MANAGERS)
    return await functions.execute_automation(automation_id)


@router.get("/automations/{automation_id}/runs")
async def automation_runs(automation_id: str, client: Backend, user: CurrentUser, access: Access) -> list[dict]:
    repo = AutomationRepository(client)
    automation = await repo.get_or_404(automation_id)
    await access.check(AssignableType.WORKSPACE, automation["workspace_id"])
    return await repo.list_runs(automation_id)

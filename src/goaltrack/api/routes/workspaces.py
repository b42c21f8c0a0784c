"""Workspace API routes, including the goal canvas layout."""

from dataclasses import asdict

from fastapi import APIRouter, Query

from goaltrack.dependencies import Access, Backend, CurrentUser, Functions
from goaltrack.models.automation import SaasTemplateRequest
from goaltrack.models.enums import AssignableType
from goaltrack.models.goal import Goal
from goaltrack.models.workspace import WorkspaceCreate
from goaltrack.repositories.workspace_repo import WorkspaceRepository
from goaltrack.services.access import MANAGERS
from goaltrack.services.calculations.canvas import CanvasView
from goaltrack.services.calculations.goal_layout import layout_goals
from goaltrack.services.provisioning import Provisioner
from goaltrack.state.workspace import WorkspaceState

router = APIRouter(tags=["Workspaces"])


@router.get("/workspaces")
async def list_workspaces(client: Backend, user: CurrentUser) -> list[dict]:
    """Active workspaces visible to the caller, newest first."""
    return await WorkspaceRepository(client).list_active()


@router.post("/workspaces", status_code=201)
async def create_workspace(body: WorkspaceCreate, client: Backend, user: CurrentUser, access: Access) -> dict:
    provisioner = Provisioner(client)
    if body.organization_id is None:
        return await provisioner.create_workspace_with_org(body.name, user["id"])
    await access.check(AssignableType.ORGANIZATION, body.organization_id, MANAGERS)
    return await provisioner.create_workspace(body.name, user["id"], body.organization_id)


@router.get("/workspaces/{workspace_id}")
async def get_workspace(workspace_id: str, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.WORKSPACE, workspace_id)
    state = WorkspaceState(client, workspace_id)
    await state.refetch()
    return {"workspace": state.workspace, "goals": state.goals, "team": state.team}


@router.get("/workspaces/{workspace_id}/canvas")
async def get_canvas(
    workspace_id: str,
    client: Backend,
    user: CurrentUser,
    access: Access,
    viewport_width: float = Query(1440, gt=0),
    viewport_height: float = Query(900, gt=0),
) -> dict:
    """Goal positions, labels, separators and connectors plus the initial viewport transform."""
    await access.check(AssignableType.WORKSPACE, workspace_id)
    state = WorkspaceState(client, workspace_id)
    await state.refetch()
    goals = [Goal.model_validate(g) for g in await state.goals_with_connections()]
    layout = layout_goals(goals)
    return {
        **layout.model_dump(mode="json"),
        "transform": asdict(CanvasView.centered(viewport_width, viewport_height)),
    }


@router.get("/workspaces/{workspace_id}/health")
async def workspace_health(
    workspace_id: str, user: CurrentUser, access: Access, functions: Functions
):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.workspace_health(workspace_id)


@router.get("/workspaces/{workspace_id}/timeline-analysis")
async def project_timeline(
    workspace_id: str, user: CurrentUser, access: Access, functions: Functions
):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.project_timeline(workspace_id)


@router.post("/workspaces/{workspace_id}/saas-template", status_code=201)
async def instantiate_saas_template(
    workspace_id: str,
    body: SaasTemplateRequest,
    user: CurrentUser,
    access: Access,
    functions: Functions,
):
    await access.check(AssignableType.WORKSPACE, workspace_id, MANAGERS)
    return await functions.instantiate_saas_template(
        workspace_id, body.project_name, user["id"], body.template_name
    )

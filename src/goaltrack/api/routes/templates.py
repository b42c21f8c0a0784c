"""Template routes: workspace and public templates, and applying them."""

from fastapi import APIRouter

from goaltrack.dependencies import Access, Backend, CurrentUser, Functions
from goaltrack.models.automation import TemplateApply, TemplateCreate, TemplateUpdate
from goaltrack.models.enums import AssignableType
from goaltrack.repositories.template_repo import TemplateRepository
from goaltrack.services.access import MANAGERS, AccessChecker

router = APIRouter(tags=["Templates"])


async def _check_editable(template: dict, user: dict, access: AccessChecker) -> None:
    # Creators edit their own templates; anyone else needs to manage the workspace
    if template.get("created_by") != user["id"]:
        await access.check(AssignableType.WORKSPACE, template.get("workspace_id") or "", MANAGERS)


@router.get("/workspaces/{workspace_id}/templates")
async def list_templates(workspace_id: str, client: Backend, user: CurrentUser, access: Access) -> list[dict]:
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await TemplateRepository(client).list_available(workspace_id)


@router.post("/templates", status_code=201)
async def create_template(body: TemplateCreate, client: Backend, user: CurrentUser, access: Access) -> dict:
    if body.workspace_id:
        await access.check(AssignableType.WORKSPACE, body.workspace_id, MANAGERS)
    values = {**body.model_dump(mode="json", exclude_none=True), "created_by": user["id"], "usage_count": 0}
    return await TemplateRepository(client).create(values)


@router.get("/templates/{template_id}")
async def get_template(template_id: str, client: Backend, user: CurrentUser, access: Access) -> dict:
    template = await TemplateRepository(client).get_or_404(template_id)
    if not template.get("is_public"):
        await access.check(AssignableType.WORKSPACE, template.get("workspace_id") or "")
    return template


@router.patch("/templates/{template_id}")
async def update_template(
    template_id: str, body: TemplateUpdate, client: Backend, user: CurrentUser, access: Access
) -> dict:
    repo = TemplateRepository(client)
    await _check_editable(await repo.get_or_404(template_id), user, access)
    return await repo.update(template_id, body.model_dump(mode="json", exclude_unset=True))


@router.delete("/templates/{template_id}", status_code=204)
async def delete_template(template_id: str, client: Backend, user: CurrentUser, access: Access) -> None:
    repo = TemplateRepository(client)
    await _check_editable(await repo.get_or_404(template_id), user, access)
    await repo.delete(template_id)


@router.post("/templates/{template_id}/apply")
async def apply_template(
    template_id: str, body: TemplateApply, client: Backend, user: CurrentUser, functions: Functions
):
    """Instantiate a template through the ``apply-template`` function and count the use."""
    result = await functions.apply_template(template_id, body.variables, user["id"])
    await TemplateRepository(client).increment_usage(template_id)
    return result

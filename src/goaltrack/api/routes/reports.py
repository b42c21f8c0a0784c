"""Report generation and listing."""

from fastapi import APIRouter

from goaltrack.dependencies import Access, Backend, CurrentUser, Functions
from goaltrack.models.automation import ReportRequest
from goaltrack.models.enums import AssignableType
from goaltrack.repositories.report_repo import ReportRepository
from goaltrack.services.access import MANAGERS

router = APIRouter(tags=["Reports"])


@router.post("/workspaces/{workspace_id}/reports", status_code=202)
async def generate_report(
    workspace_id: str, body: ReportRequest, user: CurrentUser, access: Access, functions: Functions
):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.generate_report(
        workspace_id,
        body.type,
        body.format,
        body.sections,
        filters=body.filters,
        date_start=body.date_start,
        date_end=body.date_end,
    )


@router.get("/workspaces/{workspace_id}/reports")
async def list_reports(workspace_id: str, client: Backend, user: CurrentUser, access: Access) -> list[dict]:
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await ReportRepository(client).list_by_workspace(workspace_id)


@router.get("/reports/{report_id}")
async def get_report(report_id: str, client: Backend, user: CurrentUser, access: Access) -> dict:
    report = await ReportRepository(client).get_or_404(report_id)
    await access.check(AssignableType.WORKSPACE, report["workspace_id"])
    return report


@router.delete("/reports/{report_id}", status_code=204)
async def delete_report(report_id: str, client: Backend, user: CurrentUser, access: Access) -> None:
    repo = ReportRepository(client)
    report = await repo.get_or_404(report_id)
    await access.check(AssignableType.WORKSPACE, report["workspace_id"], MANAGERS)
    await repo.delete(report_id)

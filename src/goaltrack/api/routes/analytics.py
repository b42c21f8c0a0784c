"""Analytics, predictions, KPIs and metric summaries."""

from fastapi import APIRouter, Query

from goaltrack.dependencies import Access, Backend, CurrentUser, Functions
from goaltrack.models.analytics import AdvancedAnalyticsQuery, MetricAnalysis
from goaltrack.models.automation import AnalyticsQuery
from goaltrack.models.common import utcnow
from goaltrack.models.enums import AssignableType, TimeRange, TrendDirection
from goaltrack.models.metrics import KPI, KPICreate, KPIUpdate, KPIValue, Metrics
from goaltrack.repositories.kpi_repo import KPIRepository
from goaltrack.services.access import MANAGERS
from goaltrack.services.calculations.kpi import (
    filter_kpis_by_range,
    filter_kpis_by_trend,
    kpi_trends,
    metrics_calculations,
    range_start,
)

router = APIRouter(tags=["Analytics"])


def timeframe_body(body: MetricAnalysis) -> dict:
    return body.timeframe.model_dump(mode="json", exclude_none=True)


@router.post("/workspaces/{workspace_id}/analytics")
async def workspace_analytics(
    workspace_id: str, body: AnalyticsQuery, user: CurrentUser, access: Access, functions: Functions
):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.workspace_analytics(
        workspace_id, body.analysis_type, body.start_date, body.end_date
    )


@router.post("/workspaces/{workspace_id}/analytics/query")
async def advanced_analytics_query(
    workspace_id: str, body: AdvancedAnalyticsQuery, user: CurrentUser, access: Access, functions: Functions
):
    """Aggregate metrics over dimensions and filters within a timeframe."""
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.run_analytics_query(workspace_id, body.model_dump(mode="json", exclude_none=True))


@router.post("/workspaces/{workspace_id}/analytics/trends")
async def analytics_trends(
    workspace_id: str, body: MetricAnalysis, user: CurrentUser, access: Access, functions: Functions
):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.analyze_trends(workspace_id, body.metrics, timeframe_body(body))


@router.post("/workspaces/{workspace_id}/analytics/correlations")
async def analytics_correlations(
    workspace_id: str, body: MetricAnalysis, user: CurrentUser, access: Access, functions: Functions
):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.find_correlations(workspace_id, body.metrics, timeframe_body(body))


@router.post("/workspaces/{workspace_id}/analytics/anomalies")
async def analytics_anomalies(
    workspace_id: str, body: MetricAnalysis, user: CurrentUser, access: Access, functions: Functions
):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.detect_anomalies(workspace_id, body.metrics, timeframe_body(body))


@router.get("/workspaces/{workspace_id}/predictions")
async def predictive_analytics(workspace_id: str, user: CurrentUser, access: Access, functions: Functions):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.predictive_analytics(workspace_id)


@router.post("/metrics/summary")
async def metrics_summary(body: Metrics, user: CurrentUser) -> dict:
    """Time, budget, risk and efficiency figures for a goal's metrics block."""
    return metrics_calculations(body).model_dump()


@router.get("/goals/{goal_id}/kpis")
async def list_kpis(
    goal_id: str,
    client: Backend,
    user: CurrentUser,
    access: Access,
    time_range: TimeRange | None = Query(None, alias="range"),
    direction: TrendDirection | None = None,
) -> list[dict]:
    """KPIs with trends; ``range`` narrows history, ``direction`` keeps only matching trends."""
    await access.check(AssignableType.GOAL, goal_id)
    rows = await KPIRepository(client).list_by_goal(goal_id)
    kpis = kpi_trends([KPI.model_validate(r) for r in rows])
    if time_range is not None:
        kpis = filter_kpis_by_range(kpis, time_range, utcnow())
    if direction is not None:
        kpis = filter_kpis_by_trend(kpis, direction)
    return [k.model_dump(mode="json") for k in kpis]


@router.post("/kpis", status_code=201)
async def create_kpi(body: KPICreate, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.GOAL, body.goal_id, MANAGERS)
    return await KPIRepository(client).create(body.model_dump(exclude_none=True))


@router.patch("/kpis/{kpi_id}")
async def update_kpi(kpi_id: str, body: KPIUpdate, client: Backend, user: CurrentUser, access: Access) -> dict:
    repo = KPIRepository(client)
    kpi = await repo.get_or_404(kpi_id)
    await access.check(AssignableType.GOAL, kpi["goal_id"], MANAGERS)
    return await repo.update(kpi_id, body.model_dump(exclude_unset=True))


@router.post("/kpis/{kpi_id}/values", status_code=201)
async def record_kpi_value(
    kpi_id: str, body: KPIValue, client: Backend, user: CurrentUser, access: Access
) -> dict:
    repo = KPIRepository(client)
    kpi = await repo.get_or_404(kpi_id)
    await access.check(AssignableType.GOAL, kpi["goal_id"], MANAGERS)
    return await repo.record_value(kpi_id, body.value, body.target)


@router.get("/kpis/{kpi_id}/history")
async def kpi_history(
    kpi_id: str,
    client: Backend,
    user: CurrentUser,
    access: Access,
    time_range: TimeRange = Query(TimeRange.MONTH, alias="range"),
) -> list[dict]:
    repo = KPIRepository(client)
    kpi = await repo.get_or_404(kpi_id)
    await access.check(AssignableType.GOAL, kpi["goal_id"])
    return await repo.history(kpi_id, range_start(time_range, utcnow()))

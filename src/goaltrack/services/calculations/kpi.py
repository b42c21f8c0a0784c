"""Metric ratios, KPI trends and time-range filtering."""

from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel

from goaltrack.models.enums import RiskSeverity, TimeRange, TrendDirection
from goaltrack.models.metrics import KPI, KPIPoint, Metrics, Trend
from goaltrack.services.calculations.task_metrics import percent

SEVERITY_WEIGHT = {RiskSeverity.HIGH: 3, RiskSeverity.MEDIUM: 2, RiskSeverity.LOW: 1}

RANGE_OFFSETS = {
    TimeRange.WEEK: timedelta(days=7),
    TimeRange.MONTH: timedelta(days=30),
    TimeRange.QUARTER: relativedelta(months=3),
    TimeRange.HALF_YEAR: relativedelta(months=6),
    TimeRange.YEAR: relativedelta(years=1),
}


class MetricsSummary(BaseModel):
    time_progress: float
    budget_progress: float
    risk_score: float
    is_over_budget: bool
    is_over_time: bool
    efficiency: float


def metrics_calculations(metrics: Metrics) -> MetricsSummary:
    """Progress ratios are not clamped; over 100 means over time or budget."""
    time_progress = percent(metrics.time.time_spent, metrics.time.estimated)
    budget_progress = percent(metrics.budget.spent, metrics.budget.allocated)

    risks = metrics.risks
    if risks.risk_score:
        risk_score = risks.risk_score
    elif risks.risks:
        risk_score = sum(SEVERITY_WEIGHT[r.severity] for r in risks.risks) / len(risks.risks)
    else:
        risk_score = 0.0

    if metrics.performance and metrics.performance.efficiency:
        efficiency = metrics.performance.efficiency
    else:
        efficiency = percent(metrics.time.estimated, metrics.time.time_spent)

    return MetricsSummary(
        time_progress=time_progress,
        budget_progress=budget_progress,
        risk_score=risk_score,
        is_over_budget=budget_progress > 100,
        is_over_time=time_progress > 100,
        efficiency=efficiency,
    )


def trend_between(kpi: KPI, first: float, last: float) -> Trend | None:
    if first == 0:
        return None
    change = (last - first) / first * 100
    rising = change >= 0
    return Trend(
        value=abs(change),
        direction=TrendDirection.UP if rising else TrendDirection.DOWN,
        is_positive=rising == (kpi.target >= kpi.value),
    )


def kpi_trends(kpis: list[KPI]) -> list[KPI]:
    """Attach the change between the last two history points to each KPI."""
    result = []
    for kpi in kpis:
        history = kpi.history or []
        trend = None
        if len(history) >= 2:
            trend = trend_between(kpi, history[-2].value, history[-1].value)
        result.append(kpi.model_copy(update={"trend": trend}) if trend else kpi)
    return result


def range_start(time_range: TimeRange, now: datetime) -> datetime:
    return now - RANGE_OFFSETS[time_range]


def filter_kpis_by_range(kpis: list[KPI], time_range: TimeRange, now: datetime) -> list[KPI]:
    """Restrict history to points after the range start and recompute the trend.

    KPIs with fewer than two points in range are returned untouched.
    """
    start = range_start(time_range, now)
    result = []
    for kpi in kpis:
        if kpi.history is None:
            result.append(kpi)
            continue
        in_range: list[KPIPoint] = [p for p in kpi.history if p.date > start]
        trend = None
        if len(in_range) >= 2:
            trend = trend_between(kpi, in_range[0].value, in_range[-1].value)
        if trend is None:
            result.append(kpi)
        else:
            result.append(kpi.model_copy(update={"history": in_range, "trend": trend}))
    return result


def filter_kpis_by_trend(kpis: list[KPI], direction: TrendDirection) -> list[KPI]:
    return [k for k in kpis if k.trend is not None and k.trend.direction == direction]

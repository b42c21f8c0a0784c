"""Request models for advanced analytics queries and workspace activity events."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from goaltrack.models.common import Timestamp


class AnalyticsTimeframe(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start_date: Timestamp
    end_date: Timestamp
    comparison_period: str | None = Field(None, pattern=r"^(previous_period|previous_year|custom)$")
    comparison_start: Timestamp | None = None
    comparison_end: Timestamp | None = None


class AnalyticsDimension(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    operator: str = Field(..., pattern=r"^(equals|contains|greater_than|less_than)$")
    value: str | int | float | bool


class AnalyticsMetric(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    aggregation: str = Field(..., pattern=r"^(sum|average|count|min|max)$")
    field: str


class SortBy(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field: str
    direction: str = Field("desc", pattern=r"^(asc|desc)$")


class AdvancedAnalyticsQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeframe: AnalyticsTimeframe
    dimensions: list[AnalyticsDimension] = Field(default_factory=list)
    metrics: list[AnalyticsMetric] = Field(..., min_length=1)
    filters: list[AnalyticsDimension] | None = None
    sort_by: SortBy | None = None
    limit: int | None = Field(None, ge=1)


class MetricAnalysis(BaseModel):
    """Metric names and timeframe for trend, correlation and anomaly analysis."""

    model_config = ConfigDict(extra="forbid")

    metrics: list[str] = Field(..., min_length=1)
    timeframe: AnalyticsTimeframe


class ActivityEvent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    event_type: str = Field(..., min_length=1, max_length=100)
    event_data: dict[str, Any] | None = None

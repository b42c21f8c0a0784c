"""Pydantic models for goal metrics and KPIs."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from goaltrack.models.common import Row, Timestamp
from goaltrack.models.enums import RiskSeverity, TrendDirection


class TimeMetrics(BaseModel):
    time_spent: float = 0
    estimated: float = 0


class BudgetMetrics(BaseModel):
    spent: float = 0
    allocated: float = 0


class Risk(BaseModel):
    title: str = ""
    severity: RiskSeverity = RiskSeverity.LOW


class RiskMetrics(BaseModel):
    risk_score: float | None = None
    risks: list[Risk] = Field(default_factory=list)


class PerformanceMetrics(BaseModel):
    efficiency: float | None = None


class Metrics(BaseModel):
    time: TimeMetrics = Field(default_factory=TimeMetrics)
    budget: BudgetMetrics = Field(default_factory=BudgetMetrics)
    risks: RiskMetrics = Field(default_factory=RiskMetrics)
    performance: PerformanceMetrics | None = None


class KPIPoint(Row):
    date: Timestamp = Field(validation_alias=AliasChoices("date", "recorded_at"))
    value: float


class Trend(BaseModel):
    value: float
    direction: TrendDirection
    is_positive: bool


class KPI(Row):
    id: str
    name: str = ""
    value: float
    target: float
    unit: str | None = None
    history: list[KPIPoint] | None = None
    trend: Trend | None = None

    @field_validator("history")
    @classmethod
    def order_history(cls, value):
        # Embedded rows come back in no particular order
        return sorted(value, key=lambda p: p.date) if value else value


class KPICreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    goal_id: str
    name: str = Field(..., min_length=1, max_length=200)
    value: float = 0
    target: float
    unit: str | None = None
    type: str = Field("number", pattern=r"^(percentage|number|currency|time)$")


class KPIUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=200)
    value: float | None = None
    target: float | None = None
    unit: str | None = None


class KPIValue(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: float
    target: float

"""Pydantic models for automations, integrations, templates and reports."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from goaltrack.models.common import Row, Timestamp
from goaltrack.models.enums import AnalysisType, AutomationTrigger, ReportFormat


class Automation(Row):
    id: str
    workspace_id: str
    name: str = ""
    description: str | None = None
    trigger_type: AutomationTrigger = AutomationTrigger.EVENT
    trigger_config: dict[str, Any] = Field(default_factory=dict)
    actions: list[dict[str, Any]] = Field(default_factory=list)
    is_active: bool = True
    run_count: int = 0
    error_count: int = 0
    last_run: Timestamp | None = None


class AutomationCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    workspace_id: str
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    trigger_type: AutomationTrigger
    trigger_config: dict[str, Any] = Field(default_factory=dict)
    actions: list[dict[str, Any]] = Field(default_factory=list)
    is_active: bool = True


class AutomationUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    trigger_type: AutomationTrigger | None = None
    trigger_config: dict[str, Any] | None = None
    actions: list[dict[str, Any]] | None = None
    is_active: bool | None = None


class IntegrationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    provider: str = Field(..., pattern=r"^(github|jira|slack|gitlab|azure_devops)$")
    config: dict[str, Any] = Field(default_factory=dict)
    webhook_url: str | None = None


class TemplateCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=200)
    type: str = Field(..., pattern=r"^(goal|task|milestone|workflow)$")
    organization_id: str
    workspace_id: str | None = None
    description: str | None = None
    category: str | None = None
    content: dict[str, Any] = Field(default_factory=dict)
    variables: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False


class TemplateUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    category: str | None = None
    content: dict[str, Any] | None = None
    variables: list[str] | None = None
    tags: list[str] | None = None
    is_public: bool | None = None


class TemplateApply(BaseModel):
    model_config = ConfigDict(extra="forbid")

    variables: dict[str, Any] = Field(default_factory=dict)


class SaasTemplateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    template_name: str = "saas_launch"
    project_name: str = Field(..., min_length=1, max_length=200)


class ReportRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str = Field("custom", pattern=r"^(performance|resources|timeline|risks|custom)$")
    format: ReportFormat = ReportFormat.JSON
    sections: list[str] = Field(..., min_length=1)
    filters: dict[str, Any] | None = None
    date_start: Timestamp | None = None
    date_end: Timestamp | None = None


class AnalyticsQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    analysis_type: AnalysisType = AnalysisType.PERFORMANCE
    start_date: Timestamp | None = None
    end_date: Timestamp | None = None

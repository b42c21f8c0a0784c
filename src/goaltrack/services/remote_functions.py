"""Invocation of the backend's edge functions and RPC procedures.

Every call passes a JSON body and returns whatever the function computes.
Nothing is interpreted here.
"""

import logging
from datetime import datetime
from typing import Any

import httpx
from supabase import AsyncClient, FunctionsError

from goaltrack.backend.client import QUERY_ERRORS
from goaltrack.errors.exceptions import BackendError
from goaltrack.models.enums import AnalysisType, ReportFormat

logger = logging.getLogger(__name__)

FUNCTION_ERRORS: tuple[type[Exception], ...] = (FunctionsError, httpx.HTTPError)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class RemoteFunctions:
    def __init__(self, client: AsyncClient):
        self.client = client

    async def invoke(self, name: str, body: dict[str, Any]) -> Any:
        action = body.get("action_type") or body.get("action") or body.get("metric_type") or body.get("analysis_type")
        logger.info("Invoking function %s (action=%s)", name, action)
        try:
            return await self.client.functions.invoke(
                name, invoke_options={"body": body, "responseType": "json"}
            )
        except FUNCTION_ERRORS as exc:
            logger.warning("Function %s failed: %s", name, exc)
            raise BackendError.wrap(f"invoke {name}", exc) from exc

    async def call_rpc(self, name: str, params: dict[str, Any]) -> Any:
        logger.info("Calling rpc %s", name)
        try:
            response = await self.client.rpc(name, params).execute()
        except QUERY_ERRORS as exc:
            logger.warning("RPC %s failed: %s", name, exc)
            raise BackendError.wrap(f"call {name}", exc) from exc
        return response.data

    # task-automation

    async def predict_completion(self, task_id: str) -> Any:
        return await self.invoke("task-automation", {"task_id": task_id, "action_type": "predict_completion"})

    async def analyze_dependencies(self, task_id: str) -> Any:
        return await self.invoke("task-automation", {"task_id": task_id, "action_type": "analyze_dependencies"})

    async def execute_automation(self, automation_id: str) -> Any:
        return await self.invoke("task-automation", {"automation_id": automation_id, "action_type": "execute"})

    # process-metrics

    async def workspace_health(self, workspace_id: str) -> Any:
        return await self.invoke("process-metrics", {"workspace_id": workspace_id, "metric_type": "workspace_health"})

    async def project_timeline(self, workspace_id: str) -> Any:
        return await self.invoke("process-metrics", {"workspace_id": workspace_id, "metric_type": "project_timeline"})

    # analytics

    async def workspace_analytics(
        self,
        workspace_id: str,
        analysis_type: AnalysisType,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> Any:
        body = {
            "workspace_id": workspace_id,
            "analysis_type": str(analysis_type),
            "start_date": _iso(start_date),
            "end_date": _iso(end_date),
        }
        return await self.invoke("analytics", body)

    async def goal_performance(self, goal_id: str) -> Any:
        return await self.invoke("analytics", {"goal_id": goal_id, "analysis_type": "goal_performance"})

    async def predictive_analytics(self, workspace_id: str) -> Any:
        return await self.invoke("predictive-analytics", {"workspace_id": workspace_id})

    async def generate_report(
        self,
        workspace_id: str,
        report_type: str,
        report_format: ReportFormat,
        sections: list[str],
        filters: dict[str, Any] | None = None,
        date_start: datetime | None = None,
        date_end: datetime | None = None,
    ) -> Any:
        body = {
            "workspace_id": workspace_id,
            "report_type": report_type,
            "format": str(report_format),
            "sections": sections,
            "filters": filters,
            "date_range": {"start": _iso(date_start), "end": _iso(date_end)},
        }
        return await self.invoke("generate-report", body)

    # advanced-analytics

    async def run_analytics_query(self, workspace_id: str, query: dict[str, Any]) -> Any:
        return await self.invoke("advanced-analytics", {"workspace_id": workspace_id, "query": query})

    async def analyze_metrics(
        self, workspace_id: str, action: str, metrics: list[str], timeframe: dict[str, Any]
    ) -> Any:
        body = {"workspace_id": workspace_id, "action": action, "metrics": metrics, "timeframe": timeframe}
        return await self.invoke("advanced-analytics", body)

    async def analyze_trends(self, workspace_id: str, metrics: list[str], timeframe: dict[str, Any]) -> Any:
        return await self.analyze_metrics(workspace_id, "analyze_trends", metrics, timeframe)

    async def find_correlations(self, workspace_id: str, metrics: list[str], timeframe: dict[str, Any]) -> Any:
        return await self.analyze_metrics(workspace_id, "find_correlations", metrics, timeframe)

    async def detect_anomalies(self, workspace_id: str, metrics: list[str], timeframe: dict[str, Any]) -> Any:
        return await self.analyze_metrics(workspace_id, "detect_anomalies", metrics, timeframe)

    # activity

    async def track_activity(
        self,
        workspace_id: str,
        event_type: str,
        user_id: str,
        event_data: dict[str, Any] | None = None,
    ) -> Any:
        body = {
            "action": "track",
            "workspace_id": workspace_id,
            "event_type": event_type,
            "user_id": user_id,
            "event_data": event_data,
        }
        return await self.invoke("activity", body)

    async def get_activity(
        self,
        workspace_id: str,
        event_type: str | None = None,
        user_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Any:
        """A page of activity events as ``{"events": [...], "pagination": {...}}``."""
        body = {
            "action": "get",
            "workspace_id": workspace_id,
            "event_type": event_type,
            "user_id": user_id,
            "start_date": _iso(start_date),
            "end_date": _iso(end_date),
            "page": page,
            "per_page": per_page,
        }
        return await self.invoke("activity", body)

    async def activity_aggregation(self, workspace_id: str, start_date: datetime, end_date: datetime) -> Any:
        body = {
            "action": "aggregate",
            "workspace_id": workspace_id,
            "start_date": _iso(start_date),
            "end_date": _iso(end_date),
        }
        data = await self.invoke("activity", body)
        return data.get("aggregation") if isinstance(data, dict) else None

    # notifications

    async def mark_notification_read(self, notification_id: str, user_id: str) -> Any:
        return await self.invoke(
            "notifications",
            {"action": "mark_read", "notification_id": notification_id, "user_id": user_id},
        )

    async def mark_all_notifications_read(self, user_id: str) -> Any:
        return await self.invoke("notifications", {"action": "mark_all_read", "user_id": user_id})

    async def delete_notification(self, notification_id: str, user_id: str) -> Any:
        return await self.invoke(
            "notifications",
            {"action": "delete", "notification_id": notification_id, "user_id": user_id},
        )

    # templates and integrations

    async def apply_template(self, template_id: str, variables: dict[str, Any], user_id: str) -> Any:
        return await self.invoke(
            "apply-template",
            {"template_id": template_id, "variables": variables, "user_id": user_id},
        )

    async def sync_integration(self, integration_id: str) -> Any:
        return await self.invoke("integration-webhooks", {"integration_id": integration_id, "action": "sync"})

    async def instantiate_saas_template(
        self,
        workspace_id: str,
        project_name: str,
        user_id: str,
        template_name: str = "saas_launch",
    ) -> Any:
        return await self.call_rpc(
            "instantiate_saas_template",
            {
                "workspace_id": workspace_id,
                "template_name": template_name,
                "project_name": project_name,
                "user_id": user_id,
            },
        )

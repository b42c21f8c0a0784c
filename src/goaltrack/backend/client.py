"""Async Supabase client construction."""

import logging

import httpx
from supabase import AsyncClient, PostgrestAPIError, StorageException, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from goaltrack.config import settings

logger = logging.getLogger(__name__)


class Tables:
    """Table names in the managed store."""

    GOALS = "goals"
    GOAL_CONNECTIONS = "goal_connections"
    MILESTONES = "milestones"
    TASKS = "tasks"
    WORKSPACES = "workspaces"
    ORGANIZATIONS = "organizations"
    TEAM_ASSIGNMENTS = "team_assignments"
    UPDATES = "updates"
    COMMENTS = "comments"
    NOTIFICATIONS = "notifications"
    RESOURCES = "resources"
    AUTOMATIONS = "automations"
    AUTOMATION_RUNS = "automation_runs"
    INTEGRATIONS = "integrations"
    TEMPLATES = "templates"
    REPORTS = "reports"
    KPIS = "kpis"
    KPI_HISTORY = "kpi_history"
    USERS = "users"
    SUBSCRIPTIONS = "subscriptions"


class Buckets:
    """Storage buckets in the managed store."""

    RESOURCES = "resources"


async def create_backend(access_token: str | None = None) -> AsyncClient:
    """Build a client for the configured project.

    With an access token every table call runs under that user's
    row-level security context instead of the anonymous role.
    """
    headers = {}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    options = AsyncClientOptions(
        schema=settings.supabase_schema,
        headers=headers,
        auto_refresh_token=False,
        persist_session=False,
    )
    logger.debug("Creating backend client (authenticated=%s)", bool(access_token))
    return await acreate_client(settings.supabase_url, settings.supabase_anon_key, options=options)


# Exceptions a table or rpc call can raise; repositories translate them into BackendError
QUERY_ERRORS: tuple[type[Exception], ...] = (PostgrestAPIError, httpx.HTTPError)

STORAGE_ERRORS: tuple[type[Exception], ...] = (StorageException, httpx.HTTPError)

# Sub-clients of AsyncClient and the attribute holding each one's httpx session.
# Postgrest, storage and functions are created on first use and stay None otherwise.
_SESSIONS = (
    ("auth", "_http_client"),
    ("_postgrest", "session"),
    ("_storage", "_client"),
    ("_functions", "_client"),
)


async def close_backend(client: AsyncClient) -> None:
    """Close the HTTP connection pools a request's client opened."""
    for component_name, session_name in _SESSIONS:
        session = getattr(getattr(client, component_name, None), session_name, None)
        if isinstance(session, httpx.AsyncClient) and not session.is_closed:
            await session.aclose()
    logger.debug("Closed backend client sessions")

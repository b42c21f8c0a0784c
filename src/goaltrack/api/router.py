"""Master API router mounted at /api/v1."""

from fastapi import APIRouter
from goaltrack.api.routes import (
    activity,
    analytics,
    auth,
    automations,
    goals,
    health,
    integrations,
    milestones,
    notifications,
    organizations,
    reports,
    resources,
    stream,
    tasks,
    templates,
    workspaces,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router)
api_router.include_router(organizations.router)
api_router.include_router(workspaces.router)
api_router.include_router(goals.router)
api_router.include_router(milestones.router)
api_router.include_router(tasks.router)
api_router.include_router(activity.router)
api_router.include_router(notifications.router)
api_router.include_router(resources.router)
api_router.include_router(automations.router)
api_router.include_router(integrations.router)
api_router.include_router(templates.router)
api_router.include_router(reports.router)
api_router.include_router(analytics.router)
api_router.include_router(stream.router)

"""Workspace view state: the workspace, its goals and its team."""

import asyncio
import logging

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import GoalTrackError, NotFoundError
from goaltrack.models.enums import AssignableType
from goaltrack.realtime.hub import RealtimeHub
from goaltrack.realtime.live_list import LiveList
from goaltrack.repositories.goal_repo import GoalConnectionRepository, GoalRepository
from goaltrack.repositories.team_repo import TeamAssignmentRepository
from goaltrack.repositories.workspace_repo import WorkspaceRepository

logger = logging.getLogger(__name__)


class WorkspaceState:
    def __init__(self, client: AsyncClient, workspace_id: str):
        self.workspace_id = workspace_id
        self.workspaces = WorkspaceRepository(client)
        self.goal_repo = GoalRepository(client)
        self.connections = GoalConnectionRepository(client)
        self.team_repo = TeamAssignmentRepository(client)
        self.workspace: dict | None = None
        self.live_goals = LiveList()
        self.team: list[dict] = []
        self.loading = False
        self.error: str | None = None

    @property
    def goals(self) -> list[dict]:
        return self.live_goals.rows

    async def refetch(self) -> None:
        self.loading = True
        self.error = None
        try:
            workspace = await self.workspaces.get(self.workspace_id)
            if workspace is None:
                raise NotFoundError("Workspace", self.workspace_id)
            self.workspace = workspace
            goals, self.team = await asyncio.gather(
                self.goal_repo.list_by_workspace(self.workspace_id),
                self.team_repo.list_for(AssignableType.WORKSPACE, self.workspace_id),
            )
            self.live_goals.reset(goals)
        except GoalTrackError as exc:
            logger.warning("Workspace %s load failed: %s", self.workspace_id, exc.message)
            self.error = exc.message
            raise
        finally:
            self.loading = False

    async def goals_with_connections(self) -> list[dict]:
        """Goals with their outgoing connections attached under ``connections``."""
        goals = self.goals
        rows = await self.connections.list_for_goals([g["id"] for g in goals])
        by_source: dict[str, list[dict]] = {}
        for row in rows:
            by_source.setdefault(row["source_goal_id"], []).append(row)
        return [{**g, "connections": by_source.get(g["id"], [])} for g in goals]

    async def watch(self, hub: RealtimeHub) -> str:
        return await hub.subscribe(
            Tables.GOALS, self.live_goals.apply, column="workspace_id", value=self.workspace_id
        )

"""Goal detail view state: the goal, its milestones, tasks and team."""

import asyncio
import logging

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import GoalTrackError, NotFoundError
from goaltrack.models.enums import AssignableType, ChangeEvent
from goaltrack.models.realtime import ChangePayload
from goaltrack.realtime.hub import RealtimeHub
from goaltrack.realtime.live_list import LiveList
from goaltrack.repositories.goal_repo import GoalRepository
from goaltrack.repositories.milestone_repo import MilestoneRepository
from goaltrack.repositories.task_repo import TaskRepository
from goaltrack.repositories.team_repo import TeamAssignmentRepository

logger = logging.getLogger(__name__)


class GoalState:
    def __init__(self, client: AsyncClient, goal_id: str):
        self.goal_id = goal_id
        self.goal_repo = GoalRepository(client)
        self.milestone_repo = MilestoneRepository(client)
        self.task_repo = TaskRepository(client)
        self.team_repo = TeamAssignmentRepository(client)
        self.goal: dict | None = None
        self.live_milestones = LiveList()
        self.live_tasks = LiveList()
        self.team: list[dict] = []
        self.loading = False
        self.error: str | None = None

    @property
    def milestones(self) -> list[dict]:
        return self.live_milestones.rows

    @property
    def tasks(self) -> list[dict]:
        return self.live_tasks.rows

    async def refetch(self) -> None:
        self.loading = True
        self.error = None
        try:
            goal = await self.goal_repo.get(self.goal_id)
            if goal is None:
                raise NotFoundError("Goal", self.goal_id)
            self.goal = goal
            milestones = await self.milestone_repo.list_by_goal(self.goal_id)
            per_milestone, self.team = await asyncio.gather(
                asyncio.gather(*(self.task_repo.list_by_milestone(m["id"]) for m in milestones)),
                self.team_repo.list_for(AssignableType.GOAL, self.goal_id),
            )
            self.live_milestones.reset(milestones)
            self.live_tasks.reset([t for tasks in per_milestone for t in tasks])
        except GoalTrackError as exc:
            logger.warning("Goal %s load failed: %s", self.goal_id, exc.message)
            self.error = exc.message
            raise
        finally:
            self.loading = False

    async def update_goal_progress(self, progress: float) -> dict:
        updated = await self.goal_repo.update_progress(self.goal_id, progress)
        self.goal = {**(self.goal or {}), **updated}
        return self.goal

    def apply_task_change(self, payload: ChangePayload) -> None:
        """Patch ``tasks`` the way ``refetch`` builds it: only tasks under one of
        the goal's milestones, not goal tasks without a milestone.
        """
        milestone_ids = {str(m["id"]) for m in self.milestones}
        if payload.event == ChangeEvent.DELETE:
            self.live_tasks.apply(payload)
        elif str(payload.new.get("milestone_id")) in milestone_ids:
            self.live_tasks.apply(payload)
        elif payload.event == ChangeEvent.UPDATE:
            # No longer under one of the goal's milestones
            self.live_tasks.apply(payload.model_copy(update={"event": ChangeEvent.DELETE}))

    async def watch(self, hub: RealtimeHub) -> list[str]:
        return [
            await hub.subscribe(Tables.MILESTONES, self.live_milestones.apply, column="goal_id", value=self.goal_id),
            await hub.subscribe(Tables.TASKS, self.apply_task_change, column="goal_id", value=self.goal_id),
        ]

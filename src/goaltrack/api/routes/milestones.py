"""Milestone API routes."""

from fastapi import APIRouter

from goaltrack.dependencies import Access, Backend, CurrentUser
from goaltrack.models.common import utcnow
from goaltrack.models.enums import AssignableType
from goaltrack.models.milestone import Milestone, MilestoneCreate, MilestoneUpdate
from goaltrack.repositories.milestone_repo import MilestoneRepository
from goaltrack.services.access import MANAGERS
from goaltrack.services.calculations.timeline import timeline_calculations

router = APIRouter(tags=["Milestones"])


@router.get("/goals/{goal_id}/milestones")
async def list_milestones(goal_id: str, client: Backend, user: CurrentUser, access: Access) -> list[dict]:
    await access.check(AssignableType.GOAL, goal_id)
    return await MilestoneRepository(client).list_by_goal(goal_id)


@router.get("/goals/{goal_id}/timeline")
async def goal_timeline(goal_id: str, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.GOAL, goal_id)
    rows = await MilestoneRepository(client).list_by_goal(goal_id)
    timeline = timeline_calculations([Milestone.model_validate(r) for r in rows], utcnow())
    return timeline.model_dump(mode="json")


@router.post("/milestones", status_code=201)
async def create_milestone(body: MilestoneCreate, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.GOAL, body.goal_id, MANAGERS)
    return await MilestoneRepository(client).create(body.model_dump(mode="json", exclude_none=True))


@router.patch("/milestones/{milestone_id}")
async def update_milestone(
    milestone_id: str, body: MilestoneUpdate, client: Backend, user: CurrentUser, access: Access
) -> dict:
    repo = MilestoneRepository(client)
    milestone = await repo.get_or_404(milestone_id)
    await access.check(AssignableType.GOAL, milestone["goal_id"], MANAGERS)
    return await repo.update(milestone_id, body.model_dump(mode="json", exclude_unset=True))


@router.delete("/milestones/{milestone_id}", status_code=204)
async def delete_milestone(milestone_id: str, client: Backend, user: CurrentUser, access: Access) -> None:
    repo = MilestoneRepository(client)
    milestone = await repo.get_or_404(milestone_id)
    await access.check(AssignableType.GOAL, milestone["goal_id"], MANAGERS)
    await repo.delete(milestone_id)


@router.post("/milestones/{milestone_id}/progress/recalculate")
async def recalculate_milestone_progress(
    milestone_id: str, client: Backend, user: CurrentUser, access: Access
) -> dict:
    """Recompute progress from the milestone's task statuses."""
    repo = MilestoneRepository(client)
    milestone = await repo.get_or_404(milestone_id)
    await access.check(AssignableType.GOAL, milestone["goal_id"])
    return {"milestone_id": milestone_id, "progress": await repo.recalculate_progress(milestone_id)}

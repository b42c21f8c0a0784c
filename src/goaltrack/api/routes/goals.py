"""Goal API routes."""

from fastapi import APIRouter

from goaltrack.dependencies import Access, Backend, CurrentUser, Functions
from goaltrack.errors.exceptions import NotFoundError
from goaltrack.models.enums import AssignableType, TeamRole
from goaltrack.models.goal import GoalCreate, GoalUpdate, ProgressUpdate
from goaltrack.models.team import GoalTeamUpdate
from goaltrack.repositories.goal_repo import GoalRepository
from goaltrack.repositories.team_repo import TeamAssignmentRepository
from goaltrack.services.access import MANAGERS, OWNERS
from goaltrack.state.goal import GoalState

router = APIRouter(tags=["Goals"])


@router.get("/workspaces/{workspace_id}/goals")
async def list_goals(workspace_id: str, client: Backend, user: CurrentUser, access: Access) -> list[dict]:
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await GoalRepository(client).list_by_workspace(workspace_id)


@router.post("/goals", status_code=201)
async def create_goal(body: GoalCreate, client: Backend, user: CurrentUser, access: Access) -> dict:
    """Create a goal; the creator becomes its owner."""
    await access.check(AssignableType.WORKSPACE, body.workspace_id, MANAGERS)
    goal = await GoalRepository(client).create(body.model_dump(mode="json", exclude_none=True))
    await TeamAssignmentRepository(client).assign(user["id"], AssignableType.GOAL, goal["id"], TeamRole.OWNER)
    return goal


@router.get("/goals/{goal_id}")
async def get_goal(goal_id: str, client: Backend, user: CurrentUser, access: Access) -> dict:
    """The goal with its milestones, their tasks and the goal's team."""
    await access.check(AssignableType.GOAL, goal_id)
    state = GoalState(client, goal_id)
    await state.refetch()
    return {
        "goal": state.goal,
        "milestones": state.milestones,
        "tasks": state.tasks,
        "team": state.team,
    }


@router.patch("/goals/{goal_id}")
async def update_goal(goal_id: str, body: GoalUpdate, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.GOAL, goal_id, MANAGERS)
    return await GoalRepository(client).update(goal_id, body.model_dump(mode="json", exclude_unset=True))


@router.delete("/goals/{goal_id}", status_code=204)
async def delete_goal(goal_id: str, client: Backend, user: CurrentUser, access: Access) -> None:
    await access.check(AssignableType.GOAL, goal_id, OWNERS)
    await GoalRepository(client).delete(goal_id)


@router.put("/goals/{goal_id}/progress")
async def update_goal_progress(
    goal_id: str, body: ProgressUpdate, client: Backend, user: CurrentUser, access: Access
) -> dict:
    await access.check(AssignableType.GOAL, goal_id, MANAGERS)
    return await GoalState(client, goal_id).update_goal_progress(body.progress)


@router.get("/goals/{goal_id}/progress/calculated")
async def calculated_progress(goal_id: str, client: Backend, user: CurrentUser, access: Access) -> dict:
    """Progress as computed by the store from the goal's tasks."""
    await access.check(AssignableType.GOAL, goal_id)
    return {"goal_id": goal_id, "progress": await GoalRepository(client).calculate_progress(goal_id)}


@router.get("/goals/{goal_id}/team")
async def get_goal_team(goal_id: str, client: Backend, user: CurrentUser, access: Access) -> list[dict]:
    await access.check(AssignableType.GOAL, goal_id)
    return await TeamAssignmentRepository(client).list_for(AssignableType.GOAL, goal_id)


@router.put("/goals/{goal_id}/team")
async def update_goal_team(
    goal_id: str, body: GoalTeamUpdate, client: Backend, user: CurrentUser, access: Access
) -> list[dict]:
    """Replace every non-owner assignment on the goal."""
    await access.check(AssignableType.GOAL, goal_id, MANAGERS)
    if await GoalRepository(client).get(goal_id) is None:
        raise NotFoundError("Goal", goal_id)
    return await TeamAssignmentRepository(client).replace_goal_team(goal_id, body.assignments)


@router.get("/goals/{goal_id}/performance")
async def goal_performance(goal_id: str, user: CurrentUser, access: Access, functions: Functions):
    await access.check(AssignableType.GOAL, goal_id)
    return await functions.goal_performance(goal_id)

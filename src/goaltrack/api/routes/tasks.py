"""Task API routes."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query

from goaltrack.dependencies import Access, Backend, CurrentUser, Functions
from goaltrack.models.common import utcnow
from goaltrack.models.enums import AssignableType, TaskPriority
from goaltrack.models.goal import ProgressUpdate
from goaltrack.models.task import BulkStatusUpdate, Task, TaskCreate, TaskFilters, TaskUpdate
from goaltrack.repositories.task_repo import TaskRepository
from goaltrack.services.access import MANAGERS
from goaltrack.services.calculations.task_metrics import filter_tasks, sort_tasks, task_calculations

router = APIRouter(tags=["Tasks"])


@router.get("/goals/{goal_id}/tasks")
async def list_tasks(
    goal_id: str,
    client: Backend,
    user: CurrentUser,
    access: Access,
    assignee: str | None = None,
    priority: TaskPriority | None = None,
    category: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    labels: Annotated[list[str] | None, Query()] = None,
    sort: str = Query("deadline", pattern=r"^(deadline|priority|created_at)$"),
    descending: bool = False,
) -> list[dict]:
    """Tasks of a goal, filtered and sorted; a date range needs both ends."""
    await access.check(AssignableType.GOAL, goal_id)
    rows = await TaskRepository(client).list_by_goal(goal_id)
    filters = TaskFilters(
        assignee=assignee,
        priority=priority,
        category=category,
        date_from=date_from,
        date_to=date_to,
        labels=labels or [],
    )
    tasks = filter_tasks([Task.model_validate(r) for r in rows], filters)
    return [t.model_dump(mode="json") for t in sort_tasks(tasks, sort, descending)]


@router.get("/goals/{goal_id}/tasks/summary")
async def task_summary(goal_id: str, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.GOAL, goal_id)
    rows = await TaskRepository(client).list_by_goal(goal_id)
    summary = task_calculations([Task.model_validate(r) for r in rows], utcnow())
    return summary.model_dump(mode="json")


@router.get("/goals/{goal_id}/tasks/dependencies")
async def tasks_with_dependencies(goal_id: str, client: Backend, user: CurrentUser, access: Access) -> list[dict]:
    await access.check(AssignableType.GOAL, goal_id)
    return await TaskRepository(client).list_with_dependencies(goal_id)


@router.get("/milestones/{milestone_id}/tasks")
async def list_milestone_tasks(
    milestone_id: str, client: Backend, user: CurrentUser, access: Access
) -> list[dict]:
    await access.check(AssignableType.MILESTONE, milestone_id)
    return await TaskRepository(client).list_by_milestone(milestone_id)


@router.post("/tasks", status_code=201)
async def create_task(body: TaskCreate, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.GOAL, body.goal_id)
    values = {**body.model_dump(mode="json", exclude_none=True), "creator_id": user["id"]}
    return await TaskRepository(client).create(values)


@router.post("/tasks/bulk-status")
async def bulk_update_status(
    body: BulkStatusUpdate, client: Backend, user: CurrentUser, access: Access
) -> dict:
    """Set one status on several tasks; every task must be accessible."""
    for task_id in body.task_ids:
        await access.check(AssignableType.TASK, task_id)
    rows = await TaskRepository(client).bulk_update_status(body.task_ids, body.status)
    return {"updated": len(rows), "status": str(body.status)}


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, client: Backend, user: CurrentUser, access: Access) -> dict:
    await access.check(AssignableType.TASK, task_id)
    return await TaskRepository(client).get_or_404(task_id)


@router.patch("/tasks/{task_id}")
async def update_task(
    task_id: str, body: TaskUpdate, client: Backend, user: CurrentUser, access: Access
) -> dict:
    await access.check(AssignableType.TASK, task_id)
    return await TaskRepository(client).update(task_id, body.model_dump(mode="json", exclude_unset=True))


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(task_id: str, client: Backend, user: CurrentUser, access: Access) -> None:
    await access.check(AssignableType.TASK, task_id, MANAGERS)
    await TaskRepository(client).delete(task_id)


@router.put("/tasks/{task_id}/progress")
async def update_task_progress(
    task_id: str, body: ProgressUpdate, client: Backend, user: CurrentUser, access: Access
) -> dict:
    await access.check(AssignableType.TASK, task_id)
    return await TaskRepository(client).update_progress(task_id, body.progress)


@router.get("/tasks/{task_id}/prediction")
async def predict_completion(task_id: str, user: CurrentUser, access: Access, functions: Functions):
    await access.check(AssignableType.TASK, task_id)
    return await functions.predict_completion(task_id)


@router.get("/tasks/{task_id}/dependency-analysis")
async def analyze_dependencies(task_id: str, user: CurrentUser, access: Access, functions: Functions):
    await access.check(AssignableType.TASK, task_id)
    return await functions.analyze_dependencies(task_id)

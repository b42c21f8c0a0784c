"""Task list filtering, sorting and progress figures."""

from datetime import datetime

from pydantic import BaseModel, Field

from goaltrack.models.enums import TaskPriority, TaskStatus
from goaltrack.models.task import Task, TaskFilters

PRIORITY_RANK = {
    TaskPriority.CRITICAL: 0,
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}


def percent(part: int | float, whole: int | float) -> float:
    return part / whole * 100 if whole else 0.0


def matches(task: Task, filters: TaskFilters) -> bool:
    if filters.assignee and filters.assignee not in task.assignees:
        return False
    if filters.priority and task.priority != filters.priority:
        return False
    if filters.category and task.category != filters.category:
        return False
    if filters.date_from and filters.date_to:
        if task.deadline is None or not filters.date_from <= task.deadline <= filters.date_to:
            return False
    return all(label in task.labels for label in filters.labels)


def filter_tasks(tasks: list[Task], filters: TaskFilters) -> list[Task]:
    return [t for t in tasks if matches(t, filters)]


def sort_tasks(tasks: list[Task], key: str = "deadline", descending: bool = False) -> list[Task]:
    """Sort by ``deadline``, ``priority`` or ``created_at``; missing values sort last."""
    if key == "priority":
        return sorted(tasks, key=lambda t: PRIORITY_RANK[t.priority], reverse=descending)
    if key not in ("deadline", "created_at"):
        raise ValueError(f"Unsupported sort key: {key}")
    present = [t for t in tasks if getattr(t, key) is not None]
    missing = [t for t in tasks if getattr(t, key) is None]
    present.sort(key=lambda t: getattr(t, key), reverse=descending)
    return present + missing


class TasksByStatus(BaseModel):
    todo: list[Task] = Field(default_factory=list)
    in_progress: list[Task] = Field(default_factory=list)
    completed: list[Task] = Field(default_factory=list)


class TaskCalculations(BaseModel):
    tasks_by_status: TasksByStatus
    overdue_tasks: list[Task]
    upcoming_tasks: list[Task]
    progress: float
    subtasks_progress: float
    checklist_progress: float
    total_tasks: int
    completed_tasks: int
    has_overdue_tasks: bool


def task_calculations(tasks: list[Task], now: datetime) -> TaskCalculations:
    by_status = TasksByStatus(
        todo=[t for t in tasks if t.status == TaskStatus.TODO],
        in_progress=[t for t in tasks if t.status == TaskStatus.IN_PROGRESS],
        completed=[t for t in tasks if t.status == TaskStatus.COMPLETED],
    )
    open_with_deadline = [
        t for t in tasks if t.deadline is not None and t.status != TaskStatus.COMPLETED
    ]
    overdue = [t for t in open_with_deadline if t.deadline < now]
    upcoming = sorted(
        (t for t in open_with_deadline if t.deadline > now), key=lambda t: t.deadline
    )

    subtasks = [s for t in tasks for s in t.subtasks]
    checklist = [c for t in tasks for c in t.checklist]
    completed = len(by_status.completed)

    return TaskCalculations(
        tasks_by_status=by_status,
        overdue_tasks=overdue,
        upcoming_tasks=upcoming,
        progress=percent(completed, len(tasks)),
        subtasks_progress=percent(sum(s.completed for s in subtasks), len(subtasks)),
        checklist_progress=percent(sum(c.completed for c in checklist), len(checklist)),
        total_tasks=len(tasks),
        completed_tasks=completed,
        has_overdue_tasks=bool(overdue),
    )

"""Milestone timeline partitions."""

from datetime import datetime

from pydantic import BaseModel

from goaltrack.models.milestone import Milestone
from goaltrack.services.calculations.task_metrics import percent


class Timeline(BaseModel):
    sorted_milestones: list[Milestone]
    completed_milestones: list[Milestone]
    overdue_milestones: list[Milestone]
    upcoming_milestones: list[Milestone]
    today_milestones: list[Milestone]
    progress: float
    next_milestone: Milestone | None
    has_overdue_milestones: bool
    has_today_milestones: bool


def timeline_calculations(milestones: list[Milestone], now: datetime) -> Timeline:
    """Partition milestones around ``now``.

    Milestones without a due date only show up in the sorted list (last)
    and, when completed, in the completed partition.
    """
    dated = sorted((m for m in milestones if m.due_date is not None), key=lambda m: m.due_date)
    ordered = dated + [m for m in milestones if m.due_date is None]

    completed = [m for m in milestones if m.completed]
    pending = [m for m in milestones if not m.completed and m.due_date is not None]
    overdue = [m for m in pending if m.due_date < now]
    upcoming = [m for m in pending if m.due_date > now]
    today = [m for m in pending if m.due_date.date() == now.date()]
    next_milestone = next((m for m in dated if not m.completed and m.due_date > now), None)

    return Timeline(
        sorted_milestones=ordered,
        completed_milestones=completed,
        overdue_milestones=overdue,
        upcoming_milestones=upcoming,
        today_milestones=today,
        progress=percent(len(completed), len(milestones)),
        next_milestone=next_milestone,
        has_overdue_milestones=bool(overdue),
        has_today_milestones=bool(today),
    )

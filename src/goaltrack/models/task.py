"""Pydantic models for tasks, subtasks and checklist items."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from goaltrack.models.common import Row, Timestamp, empty_if_none, id_list
from goaltrack.models.enums import TaskPriority, TaskStatus


class Subtask(Row):
    id: str | None = None
    title: str = ""
    completed: bool = False


class ChecklistItem(Row):
    id: str | None = None
    text: str = ""
    completed: bool = False


class Task(Row):
    id: str
    goal_id: str | None = None
    milestone_id: str | None = None
    title: str = ""
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    deadline: Timestamp | None = None
    category: str | None = None
    labels: list[str] = Field(default_factory=list)
    assignees: list[str] = Field(default_factory=list)
    subtasks: list[Subtask] = Field(default_factory=list)
    checklist: list[ChecklistItem] = Field(
        default_factory=list,
        validation_alias=AliasChoices("checklist", "checklist_items"),
    )
    estimated_hours: float | None = None
    actual_hours: float | None = None
    budget: float | None = None
    actual_cost: float | None = None
    progress: float | None = None
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None

    coerce_assignees = field_validator("assignees", mode="before")(id_list)
    coerce_lists = field_validator("labels", "subtasks", "checklist", mode="before")(empty_if_none)


class TaskCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    goal_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=300)
    milestone_id: str | None = None
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    deadline: Timestamp | None = None
    estimated_hours: float | None = Field(None, ge=0)
    budget: float | None = Field(None, ge=0)
    category: str | None = None
    labels: list[str] | None = None


class TaskUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=300)
    milestone_id: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    deadline: Timestamp | None = None
    estimated_hours: float | None = Field(None, ge=0)
    actual_hours: float | None = Field(None, ge=0)
    budget: float | None = Field(None, ge=0)
    actual_cost: float | None = Field(None, ge=0)
    category: str | None = None
    labels: list[str] | None = None


class BulkStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    task_ids: list[str] = Field(..., min_length=1)
    status: TaskStatus


class TaskFilters(BaseModel):
    """Client-side filter set applied to an already-fetched task list."""

    assignee: str | None = None
    priority: TaskPriority | None = None
    category: str | None = None
    date_from: Timestamp | None = None
    date_to: Timestamp | None = None
    labels: list[str] = Field(default_factory=list)

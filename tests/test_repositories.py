"""Tests for the table repositories against the in-memory backend."""

from datetime import datetime, timezone

import pytest
from supabase import PostgrestAPIError

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import BackendError, NotFoundError, ValidationError
from goaltrack.models.enums import AssignableType, TaskStatus, TeamRole
from goaltrack.models.team import TeamMember
from goaltrack.repositories.activity_repo import CommentRepository, UpdateRepository
from goaltrack.repositories.goal_repo import GoalConnectionRepository, GoalRepository
from goaltrack.repositories.integration_repo import IntegrationRepository
from goaltrack.repositories.kpi_repo import KPIRepository
from goaltrack.repositories.milestone_repo import MilestoneRepository
from goaltrack.repositories.task_repo import TaskRepository
from goaltrack.repositories.team_repo import TeamAssignmentRepository
from goaltrack.repositories.template_repo import TemplateRepository
from goaltrack.repositories.user_repo import UserRepository
from goaltrack.repositories.workspace_repo import WorkspaceRepository
from tests.fakes import FakeBackend


@pytest.fixture
def backend():
    return FakeBackend()


# ---------------------------------------------------------------------------
# Base behaviour
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_get_update_delete(backend):
    repo = GoalRepository(backend)
    goal = await repo.create({"title": "Ship v1", "type": "action", "workspace_id": "ws1"})
    assert goal["id"]

    assert (await repo.get(goal["id"]))["title"] == "Ship v1"
    updated = await repo.update(goal["id"], {"title": "Ship v2"})
    assert updated["title"] == "Ship v2"

    await repo.delete(goal["id"])
    assert await repo.get(goal["id"]) is None


@pytest.mark.asyncio
async def test_update_missing_row_is_not_found(backend):
    with pytest.raises(NotFoundError) as exc_info:
        await GoalRepository(backend).update("nope", {"title": "x"})
    assert exc_info.value.message == "Goal 'nope' not found"


@pytest.mark.asyncio
async def test_get_or_404(backend):
    with pytest.raises(NotFoundError):
        await MilestoneRepository(backend).get_or_404("missing")


@pytest.mark.asyncio
async def test_backend_errors_carry_operation(backend):
    backend.fail(Tables.GOALS, "select", message="permission denied for table goals")
    with pytest.raises(BackendError) as exc_info:
        await GoalRepository(backend).list_by_workspace("ws1")
    assert exc_info.value.message == "Failed to fetch goals: permission denied for table goals"
    assert exc_info.value.details == {"backend_code": "PGRST000"}
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_create_many_skips_empty_batches(backend):
    assert await TeamAssignmentRepository(backend).create_many([]) == []
    assert backend.queries == []


# ---------------------------------------------------------------------------
# Goals, milestones, tasks
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_goals_for_workspace_newest_first(backend):
    backend.seed(
        Tables.GOALS,
        {"id": "old", "workspace_id": "ws1", "created_at": "2024-01-01T00:00:00+00:00"},
        {"id": "new", "workspace_id": "ws1", "created_at": "2024-03-01T00:00:00+00:00"},
        {"id": "other", "workspace_id": "ws2", "created_at": "2024-02-01T00:00:00+00:00"},
    )
    goals = await GoalRepository(backend).list_by_workspace("ws1")
    assert [g["id"] for g in goals] == ["new", "old"]


@pytest.mark.asyncio
async def test_goal_progress_bounds(backend):
    backend.seed(Tables.GOALS, {"id": "g1", "progress": 0})
    repo = GoalRepository(backend)
    assert (await repo.update_progress("g1", 100))["progress"] == 100
    with pytest.raises(ValidationError):
        await repo.update_progress("g1", 101)
    with pytest.raises(ValidationError):
        await repo.update_progress("g1", -1)


@pytest.mark.asyncio
async def test_calculated_progress_rpc(backend):
    backend.rpc_results["calculate_goal_progress"] = 42.5
    assert await GoalRepository(backend).calculate_progress("g1") == 42.5
    assert backend.rpc_calls[-1] == ("calculate_goal_progress", {"p_goal_id": "g1"})


@pytest.mark.asyncio
async def test_connections_for_goal_set(backend):
    backend.seed(
        Tables.GOAL_CONNECTIONS,
        {"id": "c1", "source_goal_id": "g1", "target_goal_id": "g2"},
        {"id": "c2", "source_goal_id": "g3", "target_goal_id": "g1"},
    )
    repo = GoalConnectionRepository(backend)
    assert [c["id"] for c in await repo.list_for_goals(["g1", "g2"])] == ["c1"]
    assert await repo.list_for_goals([]) == []


@pytest.mark.asyncio
async def test_milestones_by_due_date(backend):
    backend.seed(
        Tables.MILESTONES,
        {"id": "late", "goal_id": "g1", "due_date": "2024-09-01"},
        {"id": "early", "goal_id": "g1", "due_date": "2024-06-01"},
    )
    milestones = await MilestoneRepository(backend).list_by_goal("g1")
    assert [m["id"] for m in milestones] == ["early", "late"]


@pytest.mark.asyncio
async def test_milestone_progress_from_task_statuses(backend):
    backend.seed(Tables.MILESTONES, {"id": "m1", "goal_id": "g1", "progress": 0}, {"id": "m2", "goal_id": "g1"})
    backend.seed(
        Tables.TASKS,
        {"id": "t1", "milestone_id": "m1", "status": "completed"},
        {"id": "t2", "milestone_id": "m1", "status": "in_progress"},
        {"id": "t3", "milestone_id": "m1", "status": "completed"},
        {"id": "t4", "milestone_id": "m1", "status": "todo"},
        {"id": "t5", "milestone_id": "m2", "status": "completed"},
    )
    repo = MilestoneRepository(backend)
    assert await repo.recalculate_progress("m1") == 50.0
    assert (await repo.get("m1"))["progress"] == 50.0


@pytest.mark.asyncio
async def test_milestone_progress_without_tasks_is_zero(backend):
    backend.seed(Tables.MILESTONES, {"id": "m1", "goal_id": "g1", "progress": 80})
    assert await MilestoneRepository(backend).recalculate_progress("m1") == 0.0
    assert backend.rows(Tables.MILESTONES)[0]["progress"] == 0.0


@pytest.mark.asyncio
async def test_task_create_requires_title_and_goal(backend):
    repo = TaskRepository(backend)
    with pytest.raises(ValidationError):
        await repo.create({"title": "", "goal_id": "g1"})
    with pytest.raises(ValidationError):
        await repo.create({"title": "Write docs"})
    task = await repo.create({"title": "Write docs", "goal_id": "g1"})
    assert task["goal_id"] == "g1"


@pytest.mark.asyncio
async def test_bulk_status_update(backend):
    backend.seed(
        Tables.TASKS,
        {"id": "t1", "status": "todo"},
        {"id": "t2", "status": "todo"},
        {"id": "t3", "status": "todo"},
    )
    rows = await TaskRepository(backend).bulk_update_status(["t1", "t3"], TaskStatus.COMPLETED)
    assert {r["id"] for r in rows} == {"t1", "t3"}
    assert [t["status"] for t in backend.rows(Tables.TASKS)] == ["completed", "todo", "completed"]


@pytest.mark.asyncio
async def test_task_dependencies_rpc(backend):
    backend.rpc_results["get_tasks_with_dependencies"] = [{"id": "t1", "depends_on": []}]
    rows = await TaskRepository(backend).list_with_dependencies("g1")
    assert rows == [{"id": "t1", "depends_on": []}]
    assert backend.rpc_calls[-1] == ("get_tasks_with_dependencies", {"p_goal_id": "g1"})


# ---------------------------------------------------------------------------
# Team assignments
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_replace_goal_team_keeps_owners(backend):
    backend.seed(
        Tables.TEAM_ASSIGNMENTS,
        {"id": "a1", "user_id": "owner", "assignable_type": "goal", "assignable_id": "g1", "role": "owner"},
        {"id": "a2", "user_id": "old", "assignable_type": "goal", "assignable_id": "g1", "role": "member"},
        {"id": "a3", "user_id": "else", "assignable_type": "goal", "assignable_id": "g2", "role": "member"},
    )
    repo = TeamAssignmentRepository(backend)
    await repo.replace_goal_team("g1", [TeamMember(user_id="new", role=TeamRole.ADMIN)])

    team = await repo.list_for(AssignableType.GOAL, "g1")
    assert sorted((a["user_id"], a["role"]) for a in team) == [("new", "admin"), ("owner", "owner")]
    assert len(await repo.list_for(AssignableType.GOAL, "g2")) == 1


@pytest.mark.asyncio
async def test_role_lookup(backend):
    repo = TeamAssignmentRepository(backend)
    await repo.assign("u1", AssignableType.WORKSPACE, "ws1", TeamRole.ADMIN)
    assert await repo.role_of("u1", AssignableType.WORKSPACE, "ws1") == TeamRole.ADMIN
    assert await repo.role_of("u2", AssignableType.WORKSPACE, "ws1") is None


# ---------------------------------------------------------------------------
# Other tables
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_active_workspaces(backend):
    backend.seed(
        Tables.WORKSPACES,
        {"id": "on", "is_active": True, "owner_id": "u2"},
        {"id": "off", "is_active": False},
    )
    assert [w["id"] for w in await WorkspaceRepository(backend).list_active()] == ["on"]
    assert await WorkspaceRepository(backend).list_by_owner("u1") == []
    assert [w["id"] for w in await WorkspaceRepository(backend).list_by_owner("u2")] == ["on"]
    assert await WorkspaceRepository(backend).list_by_ids([]) == []


@pytest.mark.asyncio
async def test_comment_edit_and_reactions(backend):
    repo = CommentRepository(backend)
    comment = await repo.create_comment("up1", "u1", "hello", [])
    assert comment["reactions"] == {}

    edited = await repo.edit(comment["id"], "hello @[Bo](u2)", ["u2"])
    assert edited["mentions"] == ["u2"]
    assert edited["edited_at"]

    reacted = await repo.set_reactions(comment["id"], {"👍": ["u1"]})
    assert reacted["reactions"] == {"👍": ["u1"]}


@pytest.mark.asyncio
async def test_updates_for_target(backend):
    backend.seed(
        Tables.UPDATES,
        {"id": "u1", "target_id": "g1", "type": "comment", "created_at": "2024-01-01T00:00:00+00:00"},
        {"id": "u2", "target_id": "g1", "type": "milestone", "created_at": "2024-02-01T00:00:00+00:00"},
    )
    updates = await UpdateRepository(backend).list_for_target("g1")
    assert [u["id"] for u in updates] == ["u2", "u1"]


@pytest.mark.asyncio
async def test_integration_configure_upserts_per_provider(backend):
    repo = IntegrationRepository(backend)
    first = await repo.configure("ws1", {"provider": "github", "config": {"repo": "a"}})
    second = await repo.configure("ws1", {"provider": "github", "config": {"repo": "b"}})
    assert first["id"] == second["id"]
    assert len(backend.rows(Tables.INTEGRATIONS)) == 1
    assert backend.rows(Tables.INTEGRATIONS)[0]["config"] == {"repo": "b"}


@pytest.mark.asyncio
async def test_templates_for_workspace_include_public(backend):
    backend.seed(
        Tables.TEMPLATES,
        {"id": "mine", "workspace_id": "ws1", "is_public": False, "usage_count": 1},
        {"id": "public", "workspace_id": "ws9", "is_public": True, "usage_count": 10},
        {"id": "private", "workspace_id": "ws9", "is_public": False, "usage_count": 50},
    )
    templates = await TemplateRepository(backend).list_available("ws1")
    assert [t["id"] for t in templates] == ["public", "mine"]


@pytest.mark.asyncio
async def test_template_usage_failure_is_swallowed(backend):
    backend.rpc_errors["increment_template_usage"] = PostgrestAPIError(
        {"message": "function does not exist", "code": "42883"}
    )
    await TemplateRepository(backend).increment_usage("tpl1")
    assert backend.rpc_calls == [("increment_template_usage", {"template_id": "tpl1"})]


@pytest.mark.asyncio
async def test_kpi_history_since(backend):
    repo = KPIRepository(backend)
    backend.seed(
        Tables.KPI_HISTORY,
        {"kpi_id": "k1", "value": 3, "recorded_at": "2024-05-03T00:00:00+00:00"},
        {"kpi_id": "k1", "value": 1, "recorded_at": "2024-04-01T00:00:00+00:00"},
        {"kpi_id": "k1", "value": 2, "recorded_at": "2024-05-02T00:00:00+00:00"},
        {"kpi_id": "k2", "value": 9, "recorded_at": "2024-05-02T00:00:00+00:00"},
    )
    since = datetime(2024, 5, 1, tzinfo=timezone.utc)
    assert [p["value"] for p in await repo.history("k1", since)] == [2, 3]

    point = await repo.record_value("k1", 4, 10)
    assert (point["kpi_id"], point["value"], point["target"]) == ("k1", 4, 10)


@pytest.mark.asyncio
async def test_user_lookups_degrade_to_none(backend):
    backend.fail(Tables.USERS)
    backend.fail(Tables.SUBSCRIPTIONS)
    repo = UserRepository(backend)
    assert await repo.get_details("u1") is None
    assert await repo.get_subscription() is None


@pytest.mark.asyncio
async def test_subscription_only_live_statuses(backend):
    backend.seed(
        Tables.SUBSCRIPTIONS,
        {"id": "s0", "status": "canceled"},
        {"id": "s1", "status": "trialing"},
    )
    assert (await UserRepository(backend).get_subscription())["id"] == "s1"


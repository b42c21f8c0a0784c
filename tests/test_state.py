"""Tests for the session store and the workspace/goal view states."""

import asyncio

import pytest

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import NotFoundError
from goaltrack.models.enums import AssignableType
from goaltrack.realtime.hub import RealtimeHub
from goaltrack.services.auth_service import AuthService
from goaltrack.state.goal import GoalState
from goaltrack.state.session import SessionStore
from goaltrack.state.workspace import WorkspaceState
from tests.fakes import TOKEN, FakeSession


async def no_sleep(delay: float) -> None:
    return None


def seed_account(backend):
    backend.seed(
        Tables.TEAM_ASSIGNMENTS,
        {"user_id": "user-ada", "assignable_type": "organization", "assignable_id": "org1", "role": "owner"},
        {"user_id": "user-ada", "assignable_type": "workspace", "assignable_id": "ws1", "role": "admin"},
    )
    backend.seed(Tables.ORGANIZATIONS, {"id": "org1", "name": "Acme"}, {"id": "org2", "name": "Other"})
    backend.seed(Tables.WORKSPACES, {"id": "ws1", "name": "Launch", "is_active": True})
    backend.seed(Tables.USERS, {"id": "user-ada", "full_name": "Ada"})
    backend.seed(Tables.SUBSCRIPTIONS, {"id": "sub1", "status": "active"})


def raw_change(event: str, new: dict | None = None, old: dict | None = None) -> dict:
    return {"data": {"type": event, "record": new, "old_record": old}}


# ---------------------------------------------------------------------------
# SessionStore
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_load_for_resolved_user(backend):
    seed_account(backend)
    snapshot = await SessionStore(backend).load({"id": "user-ada", "email": "ada@example.com"})

    assert snapshot.user["id"] == "user-ada"
    assert snapshot.user_details["full_name"] == "Ada"
    assert snapshot.subscription["id"] == "sub1"
    assert [o["id"] for o in snapshot.organizations] == ["org1"]
    assert [w["id"] for w in snapshot.workspaces] == ["ws1"]
    assert {(a.resource_type, a.resource_id) for a in snapshot.team_access} == {
        (AssignableType.ORGANIZATION, "org1"),
        (AssignableType.WORKSPACE, "ws1"),
    }
    assert snapshot.loading is False
    assert snapshot.error is None


@pytest.mark.asyncio
async def test_load_without_session_clears(backend):
    store = SessionStore(backend)
    store.organizations = [{"id": "stale"}]
    snapshot = await store.load()
    assert snapshot.user is None
    assert snapshot.organizations == []


@pytest.mark.asyncio
async def test_load_keeps_error_instead_of_raising(backend):
    backend.auth.session_failures = 10
    store = SessionStore(backend, AuthService(backend, sleep=no_sleep))
    snapshot = await store.load()
    assert snapshot.error == "Failed to fetch session: Service unavailable"
    assert snapshot.loading is False


@pytest.mark.asyncio
async def test_user_details_failure_does_not_fail_load(backend):
    seed_account(backend)
    backend.fail(Tables.USERS)
    snapshot = await SessionStore(backend).load({"id": "user-ada"})
    assert snapshot.user_details is None
    assert snapshot.error is None
    assert [o["id"] for o in snapshot.organizations] == ["org1"]


@pytest.mark.asyncio
async def test_auth_listener_reloads_and_clears(backend):
    seed_account(backend)
    store = SessionStore(backend)
    store.start()
    store.start()
    assert len(backend.auth.subscriptions) == 1

    user = backend.auth.tokens[TOKEN]
    backend.auth.session = FakeSession(access_token=TOKEN, refresh_token="r", user=user)
    backend.auth.emit("SIGNED_IN", backend.auth.session)
    await asyncio.gather(*store._tasks)
    assert store.user["id"] == "user-ada"
    assert [o["id"] for o in store.organizations] == ["org1"]

    backend.auth.emit("SIGNED_OUT", None)
    assert store.user is None
    assert store.workspaces == []

    await store.close()
    assert backend.auth.subscriptions[0].active is False


# ---------------------------------------------------------------------------
# WorkspaceState
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_workspace_refetch(backend):
    backend.seed(Tables.WORKSPACES, {"id": "ws1", "name": "Launch"})
    backend.seed(
        Tables.GOALS,
        {"id": "g1", "workspace_id": "ws1", "created_at": "2024-01-01T00:00:00+00:00"},
        {"id": "g2", "workspace_id": "ws1", "created_at": "2024-02-01T00:00:00+00:00"},
    )
    backend.seed(
        Tables.TEAM_ASSIGNMENTS,
        {"user_id": "u1", "assignable_type": "workspace", "assignable_id": "ws1", "role": "owner"},
    )
    backend.seed(Tables.GOAL_CONNECTIONS, {"id": "c1", "source_goal_id": "g1", "target_goal_id": "g2"})

    state = WorkspaceState(backend, "ws1")
    await state.refetch()
    assert state.workspace["name"] == "Launch"
    assert [g["id"] for g in state.goals] == ["g2", "g1"]
    assert len(state.team) == 1

    goals = {g["id"]: g for g in await state.goals_with_connections()}
    assert [c["id"] for c in goals["g1"]["connections"]] == ["c1"]
    assert goals["g2"]["connections"] == []


@pytest.mark.asyncio
async def test_workspace_refetch_missing(backend):
    state = WorkspaceState(backend, "nope")
    with pytest.raises(NotFoundError):
        await state.refetch()
    assert state.error == "Workspace 'nope' not found"
    assert state.loading is False


@pytest.mark.asyncio
async def test_workspace_watch_survives_refetch(backend):
    backend.seed(Tables.WORKSPACES, {"id": "ws1"})
    state = WorkspaceState(backend, "ws1")
    name = await state.watch(RealtimeHub(backend))
    assert name == "goals:workspace_id:ws1"
    assert backend.channels[name].bindings[0]["filter"] == "workspace_id=eq.ws1"

    await state.refetch()
    backend.channels[name].emit(raw_change("INSERT", new={"id": "g5", "workspace_id": "ws1"}))
    assert [g["id"] for g in state.goals] == ["g5"]


# ---------------------------------------------------------------------------
# GoalState
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_goal_refetch_collects_milestone_tasks(backend):
    backend.seed(Tables.GOALS, {"id": "g1", "title": "Launch", "progress": 10})
    backend.seed(
        Tables.MILESTONES,
        {"id": "m1", "goal_id": "g1", "due_date": "2024-06-01"},
        {"id": "m2", "goal_id": "g1", "due_date": "2024-07-01"},
    )
    backend.seed(
        Tables.TASKS,
        {"id": "t1", "goal_id": "g1", "milestone_id": "m1"},
        {"id": "t2", "goal_id": "g1", "milestone_id": "m2"},
        {"id": "t3", "goal_id": "g1", "milestone_id": None},
    )

    state = GoalState(backend, "g1")
    await state.refetch()
    assert [m["id"] for m in state.milestones] == ["m1", "m2"]
    assert sorted(t["id"] for t in state.tasks) == ["t1", "t2"]

    goal = await state.update_goal_progress(55)
    assert goal["progress"] == 55
    assert goal["title"] == "Launch"


@pytest.mark.asyncio
async def test_goal_refetch_missing(backend):
    state = GoalState(backend, "missing")
    with pytest.raises(NotFoundError):
        await state.refetch()
    assert state.error == "Goal 'missing' not found"


@pytest.mark.asyncio
async def test_goal_watch_subscribes_milestones_and_tasks(backend):
    state = GoalState(backend, "g1")
    names = await state.watch(RealtimeHub(backend))
    assert names == ["milestones:goal_id:g1", "tasks:goal_id:g1"]

    backend.channels["milestones:goal_id:g1"].emit(raw_change("INSERT", new={"id": "m9", "goal_id": "g1"}))
    backend.channels["tasks:goal_id:g1"].emit(
        raw_change("INSERT", new={"id": "t9", "goal_id": "g1", "milestone_id": "m9"})
    )
    assert [t["id"] for t in state.tasks] == ["t9"]
    assert [m["id"] for m in state.milestones] == ["m9"]


@pytest.mark.asyncio
async def test_goal_watch_keeps_only_tasks_under_goal_milestones(backend):
    backend.seed(Tables.GOALS, {"id": "g1", "title": "Launch"})
    backend.seed(Tables.MILESTONES, {"id": "m1", "goal_id": "g1"})
    backend.seed(Tables.TASKS, {"id": "t1", "goal_id": "g1", "milestone_id": "m1"})
    state = GoalState(backend, "g1")
    await state.refetch()
    await state.watch(RealtimeHub(backend))
    tasks = backend.channels["tasks:goal_id:g1"]

    tasks.emit(raw_change("INSERT", new={"id": "t2", "goal_id": "g1", "milestone_id": None}))
    tasks.emit(raw_change("INSERT", new={"id": "t3", "goal_id": "g1", "milestone_id": "m-other"}))
    assert [t["id"] for t in state.tasks] == ["t1"]

    tasks.emit(raw_change("UPDATE", new={"id": "t1", "goal_id": "g1", "milestone_id": None}))
    assert state.tasks == []

    tasks.emit(raw_change("UPDATE", new={"id": "t2", "goal_id": "g1", "milestone_id": "m1"}))
    assert [t["id"] for t in state.tasks] == ["t2"]
    tasks.emit(raw_change("DELETE", old={"id": "t2"}))
    assert state.tasks == []

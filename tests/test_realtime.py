"""Tests for the realtime channel hub, change payloads and live lists."""

import pytest

from goaltrack.models.enums import ChangeEvent
from goaltrack.models.realtime import ChangePayload
from goaltrack.realtime.hub import RealtimeHub, channel_name
from goaltrack.realtime.live_list import LiveList
from tests.fakes import FakeBackend


def raw_change(event: str, new: dict | None = None, old: dict | None = None) -> dict:
    return {
        "data": {
            "type": event,
            "table": "goals",
            "schema": "public",
            "record": new,
            "old_record": old,
            "commit_timestamp": "2024-05-15T12:00:00Z",
        }
    }


def test_channel_names():
    assert channel_name("goals", "workspace_id", "ws1") == "goals:workspace_id:ws1"
    assert channel_name("goals") == "public:goals"


def test_payload_from_nested_and_flat_shapes():
    nested = ChangePayload.from_raw(raw_change("UPDATE", new={"id": 1, "title": "x"}))
    assert nested.event == ChangeEvent.UPDATE
    assert nested.table == "goals"
    assert nested.row_id == "1"
    assert nested.commit_timestamp == "2024-05-15T12:00:00Z"

    flat = ChangePayload.from_raw({"eventType": "delete", "old": {"id": "g1"}, "new": {}})
    assert flat.event == ChangeEvent.DELETE
    assert flat.row_id == "g1"


# ---------------------------------------------------------------------------
# LiveList
# ---------------------------------------------------------------------------


def test_live_list_applies_changes():
    rows = LiveList([{"id": "g1", "title": "one"}])
    rows.apply(ChangePayload.from_raw(raw_change("INSERT", new={"id": "g2", "title": "two"})))
    rows.apply(ChangePayload.from_raw(raw_change("UPDATE", new={"id": "g1", "title": "uno"})))
    assert rows.rows == [{"id": "g1", "title": "uno"}, {"id": "g2", "title": "two"}]

    rows.apply(ChangePayload.from_raw(raw_change("DELETE", old={"id": "g1"})))
    assert rows.rows == [{"id": "g2", "title": "two"}]
    assert len(rows) == 1


def test_live_list_upserts_unseen_updates_and_repeated_inserts():
    rows = LiveList()
    rows.apply(ChangePayload.from_raw(raw_change("UPDATE", new={"id": "g9"})))
    rows.apply(ChangePayload.from_raw(raw_change("INSERT", new={"id": "g9", "v": 2})))
    assert rows.rows == [{"id": "g9", "v": 2}]
    rows.apply(ChangePayload.from_raw(raw_change("DELETE", old={"id": "missing"})))
    assert len(rows) == 1


def test_live_list_reset_keeps_identity():
    rows = LiveList([{"id": "a"}])
    apply = rows.apply
    rows.reset([{"id": "b"}])
    apply(ChangePayload.from_raw(raw_change("INSERT", new={"id": "c"})))
    assert [r["id"] for r in rows.rows] == ["b", "c"]


# ---------------------------------------------------------------------------
# RealtimeHub
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_subscribe_binds_filtered_postgres_changes():
    backend = FakeBackend()
    hub = RealtimeHub(backend)
    received = []

    name = await hub.subscribe("goals", received.append, column="workspace_id", value="ws1")

    assert name == "goals:workspace_id:ws1"
    channel = backend.channels[name]
    assert channel.subscribed is True
    [binding] = channel.bindings
    assert binding["event"] == "*"
    assert binding["table"] == "goals"
    assert binding["schema"] == "public"
    assert binding["filter"] == "workspace_id=eq.ws1"

    channel.emit(raw_change("INSERT", new={"id": "g1"}))
    assert [p.row_id for p in received] == ["g1"]


@pytest.mark.asyncio
async def test_resubscribing_replaces_channel():
    backend = FakeBackend()
    hub = RealtimeHub(backend)
    await hub.subscribe("tasks", lambda p: None, column="goal_id", value="g1")
    first = backend.channels["tasks:goal_id:g1"]
    await hub.subscribe("tasks", lambda p: None, column="goal_id", value="g1")

    assert backend.removed_channels == ["tasks:goal_id:g1"]
    assert backend.channels["tasks:goal_id:g1"] is not first
    assert hub.channel_names == ["tasks:goal_id:g1"]


@pytest.mark.asyncio
async def test_same_value_on_different_columns_keeps_both_channels():
    backend = FakeBackend()
    hub = RealtimeHub(backend)
    await hub.subscribe("tasks", lambda p: None, column="goal_id", value="x1")
    await hub.subscribe("tasks", lambda p: None, column="milestone_id", value="x1")

    assert backend.removed_channels == []
    assert hub.channel_names == ["tasks:goal_id:x1", "tasks:milestone_id:x1"]
    assert [c.bindings[0]["filter"] for c in backend.channels.values()] == [
        "goal_id=eq.x1",
        "milestone_id=eq.x1",
    ]


@pytest.mark.asyncio
async def test_callback_errors_are_reported_not_raised():
    backend = FakeBackend()
    hub = RealtimeHub(backend)
    errors = []

    def explode(payload):
        raise RuntimeError("bad row")

    name = await hub.subscribe("goals", explode, on_error=errors.append)
    backend.channels[name].emit(raw_change("INSERT", new={"id": "g1"}))

    assert [str(e) for e in errors] == ["bad row"]
    assert hub.channel_names == ["public:goals"]


@pytest.mark.asyncio
async def test_unexpected_close_and_channel_error():
    backend = FakeBackend()
    hub = RealtimeHub(backend)
    errors = []
    name = await hub.subscribe("goals", lambda p: None, on_error=errors.append)

    backend.channels[name].status("CLOSED")
    backend.channels[name].status("CHANNEL_ERROR", RuntimeError("socket dropped"))

    assert [e.message for e in errors] == [
        "Subscription closed unexpectedly",
        "Subscription error: socket dropped",
    ]


@pytest.mark.asyncio
async def test_close_removes_every_channel():
    backend = FakeBackend()
    hub = RealtimeHub(backend)
    await hub.subscribe("goals", lambda p: None, column="workspace_id", value="ws1")
    await hub.subscribe("milestones", lambda p: None, column="goal_id", value="g1")

    await hub.close()

    assert sorted(backend.removed_channels) == ["goals:workspace_id:ws1", "milestones:goal_id:g1"]
    assert hub.channel_names == []
    await hub.unsubscribe("goals:workspace_id:ws1")

"""Tests for exception translation and the error response envelope."""

import httpx
import pytest
from supabase import AuthApiError, PostgrestAPIError

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import BackendError, NotFoundError
from goaltrack.logging_config import redact_secrets


def test_wrap_uses_message_and_code():
    exc = PostgrestAPIError({"message": "duplicate key value", "code": "23505"})
    error = BackendError.wrap("create goal", exc)
    assert error.message == "Failed to create goal: duplicate key value"
    assert error.details == {"backend_code": "23505"}
    assert error.code == "BACKEND_ERROR"
    assert error.status_code == 502


def test_wrap_without_code():
    error = BackendError.wrap("sign out", RuntimeError("connection reset"))
    assert error.message == "Failed to sign out: connection reset"
    assert error.details is None


def test_wrap_falls_back_to_class_name():
    error = BackendError.wrap("fetch session", RuntimeError())
    assert error.message == "Failed to fetch session: RuntimeError"


def test_wrap_auth_error():
    error = BackendError.wrap("sign up", AuthApiError("User already registered", 422, "user_already_exists"))
    assert error.message == "Failed to sign up: User already registered"
    assert error.details == {"backend_code": "user_already_exists"}


def test_not_found_message():
    error = NotFoundError("Goal", "g1")
    assert error.message == "Goal 'g1' not found"
    assert error.status_code == 404


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_missing_token_is_401_envelope(client):
    response = await client.get("/api/v1/auth/me", headers={"X-Trace-Id": "trc_abc"})
    assert response.status_code == 401
    body = response.json()
    assert body["schema_version"] == "1.0"
    assert body["error"]["code"] == "AUTHENTICATION_ERROR"
    assert body["error"]["message"] == "Authentication required"
    assert body["error"]["trace_id"] == "trc_abc"
    assert "timestamp" in body["error"]
    assert "details" not in body["error"]


@pytest.mark.asyncio
async def test_invalid_token_is_401(client):
    response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer forged"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_not_found_envelope(client, auth_headers):
    response = await client.get("/api/v1/goals/nope", headers=auth_headers)
    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "NOT_FOUND"
    assert error["message"] == "Goal 'nope' not found"


@pytest.mark.asyncio
async def test_backend_failure_is_502_envelope(backend, client, auth_headers):
    backend.fail(Tables.WORKSPACES, "select", message="permission denied for table workspaces")
    response = await client.get("/api/v1/workspaces", headers=auth_headers)
    assert response.status_code == 502
    error = response.json()["error"]
    assert error["code"] == "BACKEND_ERROR"
    assert error["message"] == "Failed to fetch workspaces: permission denied for table workspaces"
    assert error["details"] == {"backend_code": "PGRST000"}


@pytest.mark.asyncio
async def test_denied_access_is_403(backend, client, auth_headers):
    backend.grant("workspace", "ws-other", "owner")
    response = await client.get("/api/v1/workspaces/ws1/goals", headers=auth_headers)
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "AUTHORIZATION_ERROR"


@pytest.mark.asyncio
async def test_request_validation_keeps_422(client, auth_headers):
    response = await client.post("/api/v1/goals", json={"title": "No workspace"}, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unreachable_backend_is_502(app, client, auth_headers):
    async def unreachable(access_token=None):
        raise httpx.ConnectError("connection refused")

    app.state.backend_factory = unreachable
    response = await client.get("/api/v1/workspaces", headers=auth_headers)
    assert response.status_code == 502
    assert response.json()["error"]["message"] == "Failed to reach backend: connection refused"


def test_log_records_drop_secrets():
    event = redact_secrets(None, "info", {"event": "signed in", "access_token": "eyJ...", "user_id": "u1"})
    assert event == {"event": "signed in", "access_token": "[redacted]", "user_id": "u1"}

"""Server-Sent Events stream of a workspace's goal changes."""

import asyncio
import json
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from supabase import AsyncClient

from goaltrack.backend.client import Tables, close_backend
from goaltrack.config import settings
from goaltrack.dependencies import Access, CurrentUser, open_backend
from goaltrack.models.enums import AssignableType
from goaltrack.models.realtime import ChangePayload
from goaltrack.realtime.hub import RealtimeHub

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Stream"])

KEEPALIVE_SECONDS = 30


async def _event_generator(
    request: Request, client: AsyncClient, workspace_id: str
) -> AsyncGenerator[str, None]:
    """Yield SSE-formatted goal changes until the client disconnects.

    The generator owns ``client`` and closes it when the stream ends.
    """
    hub = RealtimeHub(client, settings.supabase_schema)
    queue: asyncio.Queue[dict] = asyncio.Queue()

    def on_change(payload: ChangePayload) -> None:
        queue.put_nowait({"type": "change", **payload.model_dump(mode="json")})

    def on_error(exc: Exception) -> None:
        queue.put_nowait({"type": "error", "message": str(exc)})

    try:
        await hub.subscribe(
            Tables.GOALS, on_change, column="workspace_id", value=workspace_id, on_error=on_error
        )
        logger.info("SSE subscriber connected (workspace=%s)", workspace_id)
        yield f"data: {json.dumps({'type': 'connected', 'workspace_id': workspace_id})}\n\n"

        while True:
            if await request.is_disconnected():
                break
            try:
                event = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
            except asyncio.TimeoutError:
                yield ": keepalive\n\n"
                continue
            yield f"data: {json.dumps(event)}\n\n"
    finally:
        await hub.close()
        await close_backend(client)
        logger.info("SSE subscriber disconnected (workspace=%s)", workspace_id)


@router.get("/workspaces/{workspace_id}/stream")
async def stream_goal_changes(
    workspace_id: str, request: Request, user: CurrentUser, access: Access
):
    """Stream goal inserts, updates and deletes of the workspace via SSE."""
    await access.check(AssignableType.WORKSPACE, workspace_id)
    # The request-scoped client may be closed before the stream ends
    client = await open_backend(request)
    return StreamingResponse(
        _event_generator(request, client, workspace_id),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
            "Connection": "keep-alive",
        },
    )

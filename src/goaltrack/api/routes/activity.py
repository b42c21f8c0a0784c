"""Activity feed routes: updates on goals, milestones and tasks, and their comments."""

import logging
from datetime import datetime

from fastapi import APIRouter, Query

from goaltrack.dependencies import Access, Backend, CurrentUser, Functions
from goaltrack.errors.exceptions import AuthorizationError
from goaltrack.models.activity import CommentCreate, ReactionToggle, UpdateCreate
from goaltrack.models.analytics import ActivityEvent
from goaltrack.models.enums import AssignableType
from goaltrack.repositories.activity_repo import CommentRepository, UpdateRepository
from goaltrack.repositories.notification_repo import NotificationRepository
from goaltrack.services.activity import extract_mentions, mention_notifications, toggle_reaction

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Activity"])


@router.get("/targets/{target_type}/{target_id}/updates")
async def list_updates(
    target_type: AssignableType, target_id: str, client: Backend, user: CurrentUser, access: Access
) -> list[dict]:
    await access.check(target_type, target_id)
    return await UpdateRepository(client).list_for_target(target_id)


@router.post("/targets/{target_type}/{target_id}/updates", status_code=201)
async def create_update(
    target_type: AssignableType,
    target_id: str,
    body: UpdateCreate,
    client: Backend,
    user: CurrentUser,
    access: Access,
) -> dict:
    await access.check(target_type, target_id)
    values = {
        "target_id": target_id,
        "creator_id": user["id"],
        "type": str(body.type),
        "payload": body.payload,
        "mentions": extract_mentions(str(body.payload.get("content", ""))),
    }
    return await UpdateRepository(client).create(values)


@router.get("/updates/{update_id}/comments")
async def list_comments(update_id: str, client: Backend, user: CurrentUser) -> list[dict]:
    await UpdateRepository(client).get_or_404(update_id)
    return await CommentRepository(client).list_for_update(update_id)


@router.post("/updates/{update_id}/comments", status_code=201)
async def create_comment(update_id: str, body: CommentCreate, client: Backend, user: CurrentUser) -> dict:
    """Post a comment; every user mentioned with ``@[name](id)`` gets a notification."""
    await UpdateRepository(client).get_or_404(update_id)
    mentions = extract_mentions(body.content)
    comment = await CommentRepository(client).create_comment(update_id, user["id"], body.content, mentions)
    if mentions:
        await NotificationRepository(client).create_many(mention_notifications(comment, mentions))
        logger.info("Notified %d mentioned users for comment %s", len(mentions), comment["id"])
    return comment


@router.patch("/comments/{comment_id}")
async def edit_comment(comment_id: str, body: CommentCreate, client: Backend, user: CurrentUser) -> dict:
    repo = CommentRepository(client)
    comment = await repo.get_or_404(comment_id)
    if comment.get("author_id") != user["id"]:
        raise AuthorizationError("Only the author can edit a comment")
    return await repo.edit(comment_id, body.content, extract_mentions(body.content))


@router.post("/comments/{comment_id}/reactions")
async def toggle_comment_reaction(
    comment_id: str, body: ReactionToggle, client: Backend, user: CurrentUser
) -> dict:
    repo = CommentRepository(client)
    comment = await repo.get_or_404(comment_id)
    reactions = toggle_reaction(comment.get("reactions") or {}, body.reaction, user["id"])
    return await repo.set_reactions(comment_id, reactions)


# Workspace activity events, recorded and aggregated by the activity function


@router.post("/workspaces/{workspace_id}/activity", status_code=202)
async def track_activity(
    workspace_id: str, body: ActivityEvent, user: CurrentUser, access: Access, functions: Functions
) -> dict:
    await access.check(AssignableType.WORKSPACE, workspace_id)
    await functions.track_activity(workspace_id, body.event_type, user["id"], body.event_data)
    return {"tracked": True}


@router.get("/workspaces/{workspace_id}/activity")
async def list_activity(
    workspace_id: str,
    user: CurrentUser,
    access: Access,
    functions: Functions,
    event_type: str | None = None,
    user_id: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return await functions.get_activity(
        workspace_id, event_type, user_id, start_date, end_date, page, per_page
    )


@router.get("/workspaces/{workspace_id}/activity/aggregate")
async def aggregate_activity(
    workspace_id: str,
    start_date: datetime,
    end_date: datetime,
    user: CurrentUser,
    access: Access,
    functions: Functions,
):
    await access.check(AssignableType.WORKSPACE, workspace_id)
    return {"aggregation": await functions.activity_aggregation(workspace_id, start_date, end_date)}

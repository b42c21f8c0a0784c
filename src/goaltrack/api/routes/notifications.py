"""Notification routes for the signed-in user."""

from fastapi import APIRouter

from goaltrack.dependencies import Backend, CurrentUser, Functions
from goaltrack.repositories.notification_repo import NotificationRepository

router = APIRouter(tags=["Notifications"])


@router.get("/notifications")
async def list_notifications(client: Backend, user: CurrentUser, unread: bool = False) -> list[dict]:
    repo = NotificationRepository(client)
    if unread:
        return await repo.list_unread(user["id"])
    return await repo.list_for_user(user["id"])


@router.post("/notifications/read-all")
async def mark_all_read(user: CurrentUser, functions: Functions):
    return await functions.mark_all_notifications_read(user["id"])


@router.post("/notifications/{notification_id}/read")
async def mark_read(notification_id: str, user: CurrentUser, functions: Functions):
    return await functions.mark_notification_read(notification_id, user["id"])


@router.delete("/notifications/{notification_id}", status_code=204)
async def delete_notification(notification_id: str, user: CurrentUser, functions: Functions) -> None:
    await functions.delete_notification(notification_id, user["id"])

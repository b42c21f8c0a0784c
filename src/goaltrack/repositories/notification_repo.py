"""Notification repository."""

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.repositories.base import BaseRepository


class NotificationRepository(BaseRepository):
    entity = "notification"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.NOTIFICATIONS)

    async def list_for_user(self, user_id: str, limit: int = 50) -> list[dict]:
        builder = (
            self.query()
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
        )
        return await self.run("fetch notifications", builder) or []

    async def list_unread(self, user_id: str) -> list[dict]:
        builder = (
            self.query()
            .select("*")
            .eq("user_id", user_id)
            .eq("is_read", False)
            .order("created_at", desc=True)
        )
        return await self.run("fetch notifications", builder) or []

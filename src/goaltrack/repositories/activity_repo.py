"""Activity feed repositories: updates and their comments."""

from typing import Any

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.models.common import utcnow
from goaltrack.repositories.base import BaseRepository


class UpdateRepository(BaseRepository):
    entity = "update"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.UPDATES)

    async def list_for_target(self, target_id: str) -> list[dict]:
        """Updates posted on a goal, milestone or task, newest first, comments embedded."""
        return await self.list_by_field("target_id", target_id, columns="*, comments(*)")


class CommentRepository(BaseRepository):
    entity = "comment"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.COMMENTS)

    async def get(self, comment_id: str) -> dict | None:
        return await self.get_by_id(comment_id)

    async def list_for_update(self, update_id: str) -> list[dict]:
        return await self.list_by_field("update_id", update_id, desc=False)

    async def edit(self, comment_id: str, content: str, mentions: list[str]) -> dict:
        return await self.update(
            comment_id,
            {"content": content, "mentions": mentions, "edited_at": utcnow().isoformat()},
        )

    async def set_reactions(self, comment_id: str, reactions: dict[str, list[str]]) -> dict:
        return await self.update(comment_id, {"reactions": reactions})

    async def create_comment(
        self, update_id: str, author_id: str, content: str, mentions: list[str]
    ) -> dict:
        values: dict[str, Any] = {
            "update_id": update_id,
            "author_id": author_id,
            "content": content,
            "mentions": mentions,
            "reactions": {},
        }
        return await self.create(values)

"""Template repository."""

import logging

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import BackendError
from goaltrack.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class TemplateRepository(BaseRepository):
    entity = "template"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.TEMPLATES)

    async def get(self, template_id: str) -> dict | None:
        return await self.get_by_id(template_id)

    async def list_available(self, workspace_id: str) -> list[dict]:
        """Templates of the workspace plus every public one, most used first."""
        builder = (
            self.query()
            .select("*")
            .or_(f"workspace_id.eq.{workspace_id},is_public.eq.true")
            .order("usage_count", desc=True)
        )
        return await self.run("fetch templates", builder) or []

    async def increment_usage(self, template_id: str) -> None:
        # Usage counts are advisory; a failed bump never fails the caller
        try:
            await self.rpc("increment template usage", "increment_template_usage", {"template_id": template_id})
        except BackendError as exc:
            logger.warning("Template usage increment failed: %s", exc.message)

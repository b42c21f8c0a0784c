"""Repository for user details and subscriptions."""

import logging

from supabase import AsyncClient

from goaltrack.backend.client import Tables
from goaltrack.errors.exceptions import BackendError
from goaltrack.models.enums import ACTIVE_SUBSCRIPTION_STATUSES
from goaltrack.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    entity = "user"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.USERS)

    async def get_details(self, user_id: str) -> dict | None:
        """The user's profile row, or None when it cannot be read."""
        try:
            return await self.get_by_id(user_id)
        except BackendError as exc:
            logger.warning("Error fetching user details: %s", exc.message)
            return None

    async def get_subscription(self) -> dict | None:
        """The caller's live subscription with price and product embedded."""
        builder = (
            self.client.table(Tables.SUBSCRIPTIONS)
            .select("*, prices(*, products(*))")
            .in_("status", list(ACTIVE_SUBSCRIPTION_STATUSES))
            .limit(1)
        )
        try:
            rows = await self.run("fetch subscription", builder)
        except BackendError as exc:
            logger.warning("Error fetching subscription: %s", exc.message)
            return None
        return rows[0] if rows else None

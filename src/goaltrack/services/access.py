"""Role checks delegated to the store's ``has_team_access`` function."""

import logging
from collections.abc import Iterable

from supabase import AsyncClient

from goaltrack.backend.client import QUERY_ERRORS
from goaltrack.errors.exceptions import AuthorizationError, BackendError
from goaltrack.models.enums import AssignableType, TeamRole

logger = logging.getLogger(__name__)

DEFAULT_ROLES = (TeamRole.OWNER, TeamRole.ADMIN, TeamRole.MEMBER)
MANAGERS = (TeamRole.OWNER, TeamRole.ADMIN)
OWNERS = (TeamRole.OWNER,)


class AccessChecker:
    def __init__(self, client: AsyncClient):
        self.client = client

    async def has_access(
        self,
        resource_type: AssignableType | str,
        resource_id: str,
        roles: Iterable[TeamRole] = DEFAULT_ROLES,
    ) -> bool:
        params = {
            "target_type": str(resource_type),
            "target_id": resource_id,
            "required_roles": [str(r) for r in roles],
        }
        try:
            response = await self.client.rpc("has_team_access", params).execute()
        except QUERY_ERRORS as exc:
            raise BackendError.wrap("check access", exc) from exc
        return bool(response.data)

    async def check(
        self,
        resource_type: AssignableType | str,
        resource_id: str,
        roles: Iterable[TeamRole] = DEFAULT_ROLES,
    ) -> None:
        """Raise AuthorizationError unless the caller holds one of ``roles``."""
        roles = tuple(roles)
        if not await self.has_access(resource_type, resource_id, roles):
            logger.info(
                "Access denied on %s %s (roles=%s)",
                resource_type,
                resource_id,
                ",".join(str(r) for r in roles),
            )
            raise AuthorizationError()

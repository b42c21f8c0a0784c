"""Signed-in user's session and everything loaded alongside it."""

import asyncio
import logging

from supabase import AsyncClient

from goaltrack.errors.exceptions import GoalTrackError
from goaltrack.models.enums import AssignableType
from goaltrack.models.team import TeamAccess
from goaltrack.models.user import SessionSnapshot
from goaltrack.repositories.team_repo import TeamAssignmentRepository
from goaltrack.repositories.user_repo import UserRepository
from goaltrack.repositories.workspace_repo import OrganizationRepository, WorkspaceRepository
from goaltrack.services.auth_service import AuthService

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, client: AsyncClient, auth: AuthService | None = None):
        self.client = client
        self.auth = auth or AuthService(client)
        self.users = UserRepository(client)
        self.organizations_repo = OrganizationRepository(client)
        self.workspaces_repo = WorkspaceRepository(client)
        self.team = TeamAssignmentRepository(client)
        self._subscription = None
        self._tasks: set[asyncio.Task] = set()
        self.clear()
        self.loading = False
        self.error: str | None = None

    def clear(self) -> None:
        self.user: dict | None = None
        self.user_details: dict | None = None
        self.subscription: dict | None = None
        self.organizations: list[dict] = []
        self.workspaces: list[dict] = []
        self.team_access: list[TeamAccess] = []

    async def user_organizations(self, user_id: str) -> list[dict]:
        assignments = await self.team.list_for_user(user_id)
        ids = [
            a["assignable_id"]
            for a in assignments
            if AssignableType(a["assignable_type"]) == AssignableType.ORGANIZATION
        ]
        return await self.organizations_repo.list_by_ids(ids)

    async def load(self, user: dict | None = None) -> SessionSnapshot:
        """Fetch the session, then the user's profile data when signed in.

        A ``user`` already resolved from an access token skips the session
        lookup. Failures are kept in ``error`` rather than raised.
        """
        self.loading = True
        self.error = None
        try:
            if user is None:
                session = await self.auth.refresh_session()
                user = (session or {}).get("user")
            if user is None:
                self.clear()
            else:
                await self._load_for(user)
        except GoalTrackError as exc:
            logger.warning("Session load failed: %s", exc.message)
            self.error = exc.message
        finally:
            self.loading = False
        return self.snapshot()

    async def _load_for(self, user: dict) -> None:
        self.user = user
        user_id = user["id"]
        self.user_details, self.subscription, self.organizations = await asyncio.gather(
            self.users.get_details(user_id),
            self.users.get_subscription(),
            self.user_organizations(user_id),
        )
        self.workspaces, assignments = await asyncio.gather(
            self.workspaces_repo.list_active(),
            self.team.list_for_user(user_id),
        )
        self.team_access = [TeamAccess.from_assignment(a) for a in assignments]

    def _on_auth_change(self, event, session) -> None:
        if event == "SIGNED_OUT" or session is None:
            self.clear()
            return
        task = asyncio.get_running_loop().create_task(self.load())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def start(self) -> None:
        """Reload whenever the auth state changes."""
        if self._subscription is None:
            self._subscription = self.client.auth.on_auth_state_change(self._on_auth_change)

    async def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            user=self.user,
            user_details=self.user_details,
            subscription=self.subscription,
            organizations=self.organizations,
            workspaces=self.workspaces,
            team_access=self.team_access,
            loading=self.loading,
            error=self.error,
        )

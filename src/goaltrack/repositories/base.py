"""Base repository with common CRUD operations."""

import logging
from typing import Any

from supabase import AsyncClient

from goaltrack.backend.client import QUERY_ERRORS
from goaltrack.errors.exceptions import BackendError, NotFoundError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Generic async repository over one table of the managed store.

    Rows come back as plain dicts; failures surface as ``BackendError``
    prefixed with the operation that failed.
    """

    entity = "record"

    def __init__(self, client: AsyncClient, table: str):
        self.client = client
        self.table = table

    def query(self):
        return self.client.table(self.table)

    async def run(self, operation: str, builder) -> Any:
        """Execute a built query and return its data."""
        try:
            response = await builder.execute()
        except QUERY_ERRORS as exc:
            logger.warning("%s on %s failed: %s", operation, self.table, exc)
            raise BackendError.wrap(operation, exc) from exc
        return response.data

    async def rpc(self, operation: str, function: str, params: dict[str, Any]) -> Any:
        return await self.run(operation, self.client.rpc(function, params))

    async def get_by_id(self, record_id: str, columns: str = "*") -> dict | None:
        """Get a single record by primary key."""
        rows = await self.run(
            f"fetch {self.entity}",
            self.query().select(columns).eq("id", record_id).limit(1),
        )
        return rows[0] if rows else None

    async def get_or_404(self, record_id: str, columns: str = "*") -> dict:
        row = await self.get_by_id(record_id, columns)
        if row is None:
            raise NotFoundError(self.entity.capitalize(), record_id)
        return row

    async def list_by_field(
        self,
        field: str,
        value: Any,
        order_by: str | None = "created_at",
        desc: bool = True,
        columns: str = "*",
    ) -> list[dict]:
        """List records matching a field value."""
        builder = self.query().select(columns).eq(field, value)
        if order_by:
            builder = builder.order(order_by, desc=desc)
        return await self.run(f"fetch {self.entity}s", builder) or []

    async def create(self, values: dict[str, Any]) -> dict:
        """Insert a record and return the stored row."""
        rows = await self.run(f"create {self.entity}", self.query().insert(values))
        if not rows:
            raise BackendError(f"Failed to create {self.entity}: no data returned")
        return rows[0]

    async def create_many(self, values: list[dict[str, Any]]) -> list[dict]:
        if not values:
            return []
        return await self.run(f"create {self.entity}s", self.query().insert(values)) or []

    async def update(self, record_id: str, values: dict[str, Any]) -> dict:
        """Update a record by primary key and return the stored row."""
        rows = await self.run(
            f"update {self.entity}", self.query().update(values).eq("id", record_id)
        )
        if not rows:
            raise NotFoundError(self.entity.capitalize(), record_id)
        return rows[0]

    async def delete(self, record_id: str) -> None:
        await self.run(f"delete {self.entity}", self.query().delete().eq("id", record_id))

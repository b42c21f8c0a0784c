"""One realtime channel per observed table scope."""

import logging
from collections.abc import Callable
from typing import Any

from supabase import AsyncClient

from goaltrack.errors.exceptions import BackendError
from goaltrack.models.enums import ChangeEvent
from goaltrack.models.realtime import ChangePayload

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[ChangePayload], None]
ErrorCallback = Callable[[Exception], None]


def channel_name(table: str, column: str | None = None, value: str | None = None) -> str:
    """Unfiltered channels are ``public:<table>``; filtered ones ``<table>:<column>:<value>``."""
    if column is None:
        return f"public:{table}"
    return f"{table}:{column}:{value}"


class RealtimeHub:
    """Tracks open channels by name; subscribing to a name again replaces the old channel."""

    def __init__(self, client: AsyncClient, schema: str = "public"):
        self.client = client
        self.schema = schema
        self._channels: dict[str, Any] = {}

    @property
    def channel_names(self) -> list[str]:
        return list(self._channels)

    async def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        column: str | None = None,
        value: str | None = None,
        event: ChangeEvent = ChangeEvent.ALL,
        on_error: ErrorCallback | None = None,
    ) -> str:
        """Watch row changes on ``table``, optionally only rows where ``column = value``.

        Returns the channel name to pass to ``unsubscribe``.
        """
        name = channel_name(table, column, value)
        if name in self._channels:
            await self.unsubscribe(name)

        row_filter = f"{column}=eq.{value}" if column else None

        def handle(raw: dict) -> None:
            try:
                callback(ChangePayload.from_raw(raw))
            except Exception as exc:
                logger.exception("Realtime callback failed on %s", name)
                if on_error:
                    on_error(exc)

        def status(state, err=None) -> None:
            if state == "CLOSED" and name in self._channels:
                logger.warning("Realtime channel %s closed", name)
                if on_error:
                    on_error(BackendError("Subscription closed unexpectedly"))
            elif state == "CHANNEL_ERROR":
                logger.warning("Realtime channel %s error: %s", name, err)
                if on_error:
                    on_error(BackendError(f"Subscription error: {err}"))

        channel = self.client.channel(name)
        channel.on_postgres_changes(
            str(event), handle, table=table, schema=self.schema, filter=row_filter
        )
        self._channels[name] = channel
        await channel.subscribe(status)
        logger.info("Subscribed to %s (filter=%s)", name, row_filter)
        return name

    async def unsubscribe(self, name: str) -> None:
        channel = self._channels.pop(name, None)
        if channel is None:
            return
        await self.client.remove_channel(channel)
        logger.info("Unsubscribed from %s", name)

    async def close(self) -> None:
        for name in list(self._channels):
            await self.unsubscribe(name)

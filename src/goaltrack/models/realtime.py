"""Normalized real-time change payloads."""

from typing import Any

from pydantic import BaseModel, Field

from goaltrack.models.enums import ChangeEvent


class ChangePayload(BaseModel):
    """One row-level change pushed by the realtime channel."""

    event: ChangeEvent
    table: str | None = None
    schema_name: str = "public"
    new: dict[str, Any] = Field(default_factory=dict)
    old: dict[str, Any] = Field(default_factory=dict)
    commit_timestamp: str | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "ChangePayload":
        """Accept both the nested ``{"data": {...}}`` shape and the flat one."""
        data = raw.get("data", raw)
        event = data.get("type") or data.get("eventType") or raw.get("eventType") or "*"
        return cls(
            event=ChangeEvent(str(event).upper()) if event != "*" else ChangeEvent.ALL,
            table=data.get("table"),
            schema_name=data.get("schema") or "public",
            new=data.get("record") or data.get("new") or {},
            old=data.get("old_record") or data.get("old") or {},
            commit_timestamp=data.get("commit_timestamp"),
        )

    @property
    def row_id(self) -> str | None:
        row = self.new or self.old
        value = row.get("id")
        return str(value) if value is not None else None

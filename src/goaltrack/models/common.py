"""Pydantic models and field types shared across the API surface."""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps (date-only columns) as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


Timestamp = Annotated[datetime, AfterValidator(ensure_utc)]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Error detail in API responses."""

    model_config = ConfigDict(extra="forbid")

    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str = Field(..., min_length=1, max_length=128)
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Standard error envelope returned for every handled failure."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = "1.0"
    error: ErrorDetail


class Row(BaseModel):
    """Base for rows read from the managed store.

    Unknown columns are kept so a model dump round-trips the full row.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)


def id_list(value: Any) -> list[str]:
    """Coerce a list of ids or ``{"id": ...}`` objects (or null) into plain ids."""
    if value is None:
        return []
    ids = []
    for item in value:
        if isinstance(item, dict):
            if item.get("id") is not None:
                ids.append(str(item["id"]))
        else:
            ids.append(str(item))
    return ids


def empty_if_none(value: Any) -> Any:
    return [] if value is None else value


class Position(BaseModel):
    x: float
    y: float

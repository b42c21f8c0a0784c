"""Local row list kept in step with realtime change payloads."""

from goaltrack.models.enums import ChangeEvent
from goaltrack.models.realtime import ChangePayload


class LiveList:
    def __init__(self, rows: list[dict] | None = None):
        self.rows: list[dict] = list(rows or [])

    def reset(self, rows: list[dict]) -> None:
        """Replace every row in place; bound ``apply`` callbacks stay valid."""
        self.rows = list(rows)

    def _index(self, row_id) -> int | None:
        for i, row in enumerate(self.rows):
            if str(row.get("id")) == str(row_id):
                return i
        return None

    def apply(self, payload: ChangePayload) -> None:
        """INSERT and UPDATE upsert by id; DELETE removes."""
        row_id = payload.row_id
        if row_id is None:
            return
        index = self._index(row_id)
        if payload.event == ChangeEvent.DELETE:
            if index is not None:
                del self.rows[index]
        elif payload.event in (ChangeEvent.INSERT, ChangeEvent.UPDATE):
            if index is None:
                self.rows.append(payload.new)
            else:
                self.rows[index] = payload.new

    def __len__(self) -> int:
        return len(self.rows)

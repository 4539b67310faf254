from __future__ import annotations

from typing import Any, Mapping, Protocol

Row = dict[str, Any]


class DataStore(Protocol):
    def insert(self, table: str, row: Mapping[str, Any]) -> Row: ...

    def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Row]: ...

    def update(self, table: str, row: Mapping[str, Any], filters: Mapping[str, Any]) -> list[Row]: ...

    def increment(self, table: str, key: int, column: str) -> int: ...


def page_window(limit: int | None, offset: int | None) -> tuple[int, int] | None:
    """Inclusive row window for an offset, ten rows when no limit is given."""
    if offset is None:
        return None
    return offset, offset + (limit or 10) - 1

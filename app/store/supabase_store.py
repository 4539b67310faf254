from __future__ import annotations

import logging
from typing import Any, Mapping

from postgrest.exceptions import APIError
from supabase import Client, create_client

from app.core.errors import TableNotFoundError, UpstreamError
from app.store.base import Row, page_window

logger = logging.getLogger(__name__)

MISSING_TABLE_CODES = {"PGRST116", "PGRST205", "42P01"}


def _translate(exc: Exception, table: str) -> UpstreamError:
    if isinstance(exc, APIError):
        message = exc.message or str(exc)
        if exc.code in MISSING_TABLE_CODES or "relation" in message or "does not exist" in message:
            return TableNotFoundError(f"Table '{table}' not found", details=message)
        return UpstreamError("Database request failed", details=message)
    return UpstreamError("Database request failed", details=str(exc))


class SupabaseStore:
    """Hosted Postgres through the Supabase client.

    ``increment`` is a read followed by a write, two concurrent calls can both
    read the same value and one increment is lost.
    """

    def __init__(self, url: str, key: str, client: Client | None = None):
        self._client = client or create_client(url, key)

    def _filtered(self, query: Any, filters: Mapping[str, Any] | None) -> Any:
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        return query

    def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        try:
            response = self._client.table(table).insert(dict(row)).execute()
        except Exception as exc:
            raise _translate(exc, table) from exc
        return (response.data or [dict(row)])[0]

    def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Row]:
        query = self._filtered(self._client.table(table).select("*"), filters)
        if order_by:
            query = query.order(order_by, desc=descending)
        window = page_window(limit, offset)
        if window is not None:
            query = query.range(*window)
        elif limit:
            query = query.limit(limit)
        try:
            response = query.execute()
        except Exception as exc:
            raise _translate(exc, table) from exc
        return list(response.data or [])

    def update(self, table: str, row: Mapping[str, Any], filters: Mapping[str, Any]) -> list[Row]:
        query = self._filtered(self._client.table(table).update(dict(row)), filters)
        try:
            response = query.execute()
        except Exception as exc:
            raise _translate(exc, table) from exc
        return list(response.data or [])

    def increment(self, table: str, key: int, column: str) -> int:
        rows = self.select(table, filters={"id": key}, limit=1)
        if rows:
            value = int(rows[0].get(column) or 0) + 1
            self.update(table, {column: value}, {"id": key})
        else:
            value = 1
            self.insert(table, {"id": key, column: value})
        logger.debug("counter %s.%s id=%s -> %s", table, column, key, value)
        return value

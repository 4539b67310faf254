from __future__ import annotations

import json
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping

from app.core.errors import TableNotFoundError, UpstreamError
from app.store.base import Row, page_window

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS contacts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        message TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS api_visits (
        id INTEGER PRIMARY KEY,
        count INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        description TEXT,
        technologies TEXT,
        github_url TEXT,
        live_url TEXT,
        featured INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_projects_created_at
    ON projects (created_at)
    """,
)

JSON_COLUMNS = {"technologies"}
BOOL_COLUMNS = {"featured"}


def _ident(name: str) -> str:
    if not IDENTIFIER_RE.match(name):
        raise ValueError(f"Invalid identifier '{name}'")
    return name


def _encode(column: str, value: Any) -> Any:
    if column in JSON_COLUMNS and value is not None and not isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return value


def _decode(row: sqlite3.Row) -> Row:
    out: Row = dict(row)
    for column in JSON_COLUMNS & out.keys():
        raw = out[column]
        if isinstance(raw, str):
            try:
                out[column] = json.loads(raw)
            except ValueError:
                pass
    for column in BOOL_COLUMNS & out.keys():
        if out[column] is not None:
            out[column] = bool(out[column])
    return out


def _where(filters: Mapping[str, Any] | None) -> tuple[str, list[Any]]:
    if not filters:
        return "", []
    clauses = [f"{_ident(column)} = ?" for column in filters]
    return " WHERE " + " AND ".join(clauses), [_encode(c, v) for c, v in filters.items()]


class SQLiteStore:
    """Local stand-in for the hosted database, one connection per call."""

    def __init__(self, db_path: str | Path):
        self._path = Path(db_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute("PRAGMA journal_mode=WAL;")
            for statement in SCHEMA:
                conn.execute(statement)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._path, timeout=5, isolation_level=None)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.OperationalError as exc:
            if "no such table" in str(exc):
                raise TableNotFoundError("Table not found", details=str(exc)) from exc
            raise UpstreamError("Database error", details=str(exc)) from exc
        except sqlite3.DatabaseError as exc:
            raise UpstreamError("Database error", details=str(exc)) from exc
        finally:
            conn.close()

    def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        columns = [_ident(column) for column in row]
        placeholders = ", ".join("?" for _ in columns)
        sql = f"INSERT INTO {_ident(table)} ({', '.join(columns)}) VALUES ({placeholders}) RETURNING *"
        with self._connect() as conn:
            cursor = conn.execute(sql, [_encode(c, v) for c, v in row.items()])
            return _decode(cursor.fetchone())

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
        where, params = _where(filters)
        sql = f"SELECT * FROM {_ident(table)}{where}"
        if order_by:
            sql += f" ORDER BY {_ident(order_by)} {'DESC' if descending else 'ASC'}"
        window = page_window(limit, offset)
        if window is not None:
            start, end = window
            sql += " LIMIT ? OFFSET ?"
            params += [end - start + 1, start]
        elif limit:
            sql += " LIMIT ?"
            params.append(limit)
        with self._connect() as conn:
            return [_decode(row) for row in conn.execute(sql, params).fetchall()]

    def update(self, table: str, row: Mapping[str, Any], filters: Mapping[str, Any]) -> list[Row]:
        assignments = ", ".join(f"{_ident(column)} = ?" for column in row)
        where, params = _where(filters)
        sql = f"UPDATE {_ident(table)} SET {assignments}{where} RETURNING *"
        with self._connect() as conn:
            cursor = conn.execute(sql, [_encode(c, v) for c, v in row.items()] + params)
            return [_decode(r) for r in cursor.fetchall()]

    def increment(self, table: str, key: int, column: str) -> int:
        """Atomically add one to ``column`` of row ``key``, creating the row at 1."""
        table, column = _ident(table), _ident(column)
        with self._connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                current = conn.execute(f"SELECT {column} FROM {table} WHERE id = ?", (key,)).fetchone()
                if current is None:
                    value = 1
                    conn.execute(f"INSERT INTO {table} (id, {column}) VALUES (?, ?)", (key, value))
                else:
                    value = int(current[0] or 0) + 1
                    conn.execute(f"UPDATE {table} SET {column} = ? WHERE id = ?", (value, key))
                conn.execute("COMMIT")
            except Exception:
                conn.execute("ROLLBACK")
                raise
            return value

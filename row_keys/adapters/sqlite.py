"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import re
import sqlite3
from typing import Any

from row_keys.core.connection import ConnectionConfig
from row_keys.core.cursor import StaticCursor

# Leading comments, then the statement keyword
_INSERT_RE = re.compile(
    r"^\s*(?:(?:--[^\n]*(?:\n|$)|/\*.*?\*/)\s*)*(?:INSERT|REPLACE)\b",
    re.IGNORECASE | re.DOTALL,
)


def _is_insert(sql: str) -> bool:
    return _INSERT_RE.match(sql) is not None


class SqliteSyncAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3.

    Generated keys come from ``INSERT ... RETURNING`` when the statement has
    a result description. Otherwise an INSERT or REPLACE that inserted rows
    reports ``cursor.lastrowid``; sqlite keeps the last rowid across
    statements, so nothing else does.
    """

    @property
    def paramstyle(self) -> str:
        return "named"

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        conn = sqlite3.connect(config.database, **config.extra)
        conn.row_factory = sqlite3.Row
        return conn

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        return connection.execute(sql, params or {})

    def generated_keys(self, cursor: sqlite3.Cursor, sql: str) -> Any | None:
        if cursor.description is not None:
            return cursor
        if not _is_insert(sql) or cursor.rowcount < 1:
            return None
        # sqlite reports 0 when nothing has been inserted on the connection
        if cursor.lastrowid:
            return StaticCursor.for_last_row_id(cursor.lastrowid)
        return None

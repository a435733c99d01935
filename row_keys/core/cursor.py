"""Forward-only cursor handle over a DB-API cursor.

``KeyCursor`` turns ``fetchone()`` into an advance/read pair so row mappers
can look at the current row by position or column name. Rows may be
tuples, ``sqlite3.Row`` objects or dicts (psycopg ``dict_row``).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class StaticCursor:
    """In-memory DB-API cursor over a fixed list of rows.

    Used to expose a driver's ``lastrowid`` as a generated-keys result.
    """

    def __init__(self, description: Sequence[tuple[Any, ...]], rows: Sequence[Any]) -> None:
        self.description = tuple(description)
        self._rows = list(rows)
        self._position = 0
        self._closed = False

    @classmethod
    def for_last_row_id(cls, last_row_id: Any) -> StaticCursor:
        return cls([("last_insert_rowid",) + (None,) * 6], [(last_row_id,)])

    def fetchone(self) -> Any:
        if self._closed:
            raise RuntimeError("cursor is closed")
        if self._position >= len(self._rows):
            return None
        row = self._rows[self._position]
        self._position += 1
        return row

    def close(self) -> None:
        self._closed = True


class KeyCursor:
    """Forward-only, single-pass view over a driver cursor.

    With ``release=False`` closing the view leaves the driver cursor open;
    whoever owns the driver cursor closes it.
    """

    def __init__(self, cursor: Any, *, release: bool = True) -> None:
        self._cursor = cursor
        self._release = release
        self._row: Any = None
        self._exhausted = False
        self._closed = False
        description = getattr(cursor, "description", None) or ()
        self._columns = [desc[0] for desc in description]

    @property
    def columns(self) -> list[str]:
        """Column names reported by the driver."""
        return list(self._columns)

    @property
    def row(self) -> Any:
        """The raw current row, or None before the first advance."""
        return self._row

    def advance(self) -> bool:
        """Move to the next row. Returns False once the cursor is exhausted."""
        self._check_open()
        if self._exhausted:
            return False
        row = self._cursor.fetchone()
        if row is None:
            self._exhausted = True
            self._row = None
            return False
        self._row = row
        return True

    def read_column(self, index: int | str) -> Any:
        """Read a column of the current row by position or by name."""
        self._check_open()
        if self._row is None:
            raise RuntimeError("cursor is not positioned on a row")

        row = self._row
        if isinstance(row, dict):
            if isinstance(index, int):
                return row[self._columns[index]] if self._columns else list(row.values())[index]
            return row[index]

        if isinstance(index, str):
            try:
                return row[index]
            except (TypeError, IndexError, KeyError):
                return row[self._columns.index(index)]
        return row[index]

    def as_dict(self) -> dict[str, Any]:
        """Return the current row as a column-name -> value dict."""
        self._check_open()
        if self._row is None:
            raise RuntimeError("cursor is not positioned on a row")
        if isinstance(self._row, dict):
            return dict(self._row)
        return dict(zip(self._columns, tuple(self._row), strict=True))

    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close the view, and the wrapped cursor if it owns it. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._row = None
        if self._release:
            self._cursor.close()

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("cursor is closed")

"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from row_keys.core.connection import ConnectionConfig
from row_keys.core.context import StatementContext
from row_keys.core.generated_keys import GeneratedKeys
from row_keys.core.statement import Statement
from row_keys.mapping.mappers import ColumnMapper
from tests.fakes import FakeAdapter, FakeConnection, FakeCursor


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:")


@pytest.fixture
def tmp_sql_dir(tmp_path: Path) -> Path:
    """Temporary directory for SQL files."""
    return tmp_path / "sql"


@pytest.fixture
def write_sql(tmp_sql_dir: Path):
    """Helper to write SQL files into the temp directory.

    Usage:
        write_sql("user/insert.sql", "INSERT INTO users (name) VALUES (:name)")
    """

    def _write(relative_path: str, content: str) -> Path:
        file_path = tmp_sql_dir / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def statement_context() -> StatementContext:
    return StatementContext(
        sql="INSERT INTO users (name) VALUES (:name) RETURNING id",
        label="user.insert",
        params={"name": "Alice"},
        attributes={"request_id": "req-1"},
    )


@pytest.fixture(params=[False, True], ids=["separate-cursor", "returning"])
def returning_keys(request: pytest.FixtureRequest) -> bool:
    """Whether the keys cursor is the statement cursor (``RETURNING``) or a separate one."""
    return request.param


@pytest.fixture
def make_keys(statement_context: StatementContext, returning_keys: bool):
    """Build a GeneratedKeys over a fake driver.

    Usage:
        env = make_keys([(10,), (20,)])
        env.keys.list()
        env.cursor.close_count

    Pass ``absent=True`` for a driver that returns no generated keys. Tests
    using this fixture run against both cursor shapes unless ``returning``
    is given explicitly.
    """

    def _make(
        rows: Sequence[Any] = (),
        *,
        mapper: Any = None,
        absent: bool = False,
        fail_at: int | None = None,
        fail_on_close: bool = False,
        returning: bool | None = None,
    ) -> SimpleNamespace:
        cursor = None if absent else FakeCursor(rows, fail_at=fail_at, fail_on_close=fail_on_close)
        adapter = FakeAdapter(cursor, returning=returning_keys if returning is None else returning)
        connection = FakeConnection()
        statement = Statement(connection, adapter, statement_context, autocommit=True).execute()
        keys = GeneratedKeys(
            mapper if mapper is not None else ColumnMapper(0), statement, statement_context
        )
        return SimpleNamespace(
            keys=keys,
            cursor=cursor,
            adapter=adapter,
            connection=connection,
            statement=statement,
        )

    return _make

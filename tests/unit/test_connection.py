"""Unit tests for ConnectionConfig and ConnectionManager."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from row_keys.adapters.sqlite import SqliteSyncAdapter
from row_keys.core.connection import ConnectionConfig, ConnectionManager
from row_keys.core.exceptions import AdapterError, ConnectionError  # noqa: A004


class TestConnectionConfig:
    def test_database_is_required(self) -> None:
        with pytest.raises(ValidationError):
            ConnectionConfig(driver="sqlite")  # type: ignore[call-arg]

    def test_port_is_coerced(self) -> None:
        config = ConnectionConfig(driver="postgresql", database="app", port="5432")
        assert config.port == 5432


class TestConnectionManager:
    def test_loads_adapter_by_driver(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        assert isinstance(manager.adapter, SqliteSyncAdapter)

    def test_driver_name_is_case_insensitive(self) -> None:
        manager = ConnectionManager(ConnectionConfig(driver="SQLite", database=":memory:"))
        assert isinstance(manager.adapter, SqliteSyncAdapter)

    def test_unsupported_driver(self) -> None:
        with pytest.raises(AdapterError, match="Unsupported database driver"):
            ConnectionManager(ConnectionConfig(driver="db2", database="x"))

    def test_connection_is_opened_once(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        assert manager.connection is manager.connection
        manager.close()

    def test_close_is_idempotent(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        first = manager.connection
        manager.close()
        manager.close()
        assert manager.connection is not first
        manager.close()

    def test_connect_failure(self, tmp_path: Path) -> None:
        config = ConnectionConfig(driver="sqlite", database=str(tmp_path / "missing" / "db.sqlite"))
        manager = ConnectionManager(config)
        with pytest.raises(ConnectionError, match="Failed to connect"):
            manager.connection

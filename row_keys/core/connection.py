"""Connection configuration and management.

ConnectionConfig is a Pydantic model for type-safe connection config.
ConnectionManager owns a single lazily opened DB-API connection and the
adapter that drives it.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from pydantic import BaseModel

from row_keys.core.exceptions import AdapterError, ConnectionError  # noqa: A004

logger = logging.getLogger("row_keys.core.connection")


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    extra: dict[str, Any] = {}


# Adapter module mapping: driver name -> (module_path, class_name)
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    "sqlite": ("row_keys.adapters.sqlite", "SqliteSyncAdapter"),
    "postgresql": ("row_keys.adapters.postgresql", "PostgresqlSyncAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load an adapter by driver name."""
    driver_lower = driver.lower()
    if driver_lower not in _ADAPTER_MAP:
        raise AdapterError(f"Unsupported database driver: {driver}")

    module_path, cls_name = _ADAPTER_MAP[driver_lower]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


class ConnectionManager:
    """Holds one connection for the configured driver.

    The connection is opened on first use and kept until ``close()``.
    """

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config
        self._adapter = _load_adapter(config.driver)
        self._connection: Any = None

    @property
    def adapter(self) -> Any:
        return self._adapter

    @property
    def connection(self) -> Any:
        """The open connection, connecting on first access."""
        if self._connection is None:
            logger.debug("Opening %s connection to %s", self.config.driver, self.config.database)
            try:
                self._connection = self._adapter.connect(self.config)
            except Exception as e:
                raise ConnectionError(
                    f"Failed to connect to {self.config.driver} database "
                    f"'{self.config.database}': {e}"
                ) from e
        return self._connection

    def close(self) -> None:
        """Close the connection if one is open."""
        if self._connection is not None:
            logger.debug("Closing %s connection", self.config.driver)
            self._connection.close()
            self._connection = None

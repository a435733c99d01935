"""Statement execution engine.

The Engine resolves named or inline SQL, binds parameters, executes through
the adapter, and hands back either an affected row count or the statement's
generated keys.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from row_keys.core.connection import ConnectionConfig, ConnectionManager
from row_keys.core.exceptions import ParameterBindingError
from row_keys.core.generated_keys import GeneratedKeys
from row_keys.core.params import build_context
from row_keys.core.registry import SQLRegistry
from row_keys.core.statement import Statement
from row_keys.mapping.mappers import ColumnMapper
from row_keys.mapping.protocol import RowMapper

logger = logging.getLogger("row_keys.core.engine")

T = TypeVar("T")


class Engine:
    """Synchronous statement execution engine."""

    def __init__(
        self,
        connection_manager: ConnectionManager,
        registry: SQLRegistry | None = None,
    ) -> None:
        self._connection_manager = connection_manager
        self._registry = registry if registry is not None else SQLRegistry()
        self._paramstyle = connection_manager.adapter.paramstyle

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        registry: SQLRegistry | None = None,
    ) -> Engine:
        """Create an Engine from a ConnectionConfig and SQLRegistry."""
        return cls(ConnectionManager(config), registry)

    @property
    def registry(self) -> SQLRegistry:
        return self._registry

    @property
    def connection_manager(self) -> ConnectionManager:
        return self._connection_manager

    def execute(
        self,
        query: str,
        params: Any = None,
    ) -> int:
        """Execute a write query and commit. Returns the affected row count."""
        context = build_context(query, params, self._registry, self._paramstyle)
        conn = self._connection_manager.connection

        with Statement(conn, self._connection_manager.adapter, context) as statement:
            try:
                statement.execute()
            except Exception as e:
                conn.rollback()
                raise ParameterBindingError(context.label, str(e)) from e
            conn.commit()
            return int(statement.rowcount)

    def execute_returning_keys(
        self,
        query: str,
        params: Any = None,
        *,
        mapper: RowMapper[T] | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> GeneratedKeys[T]:
        """Execute a write query and return its generated keys.

        The write is committed when the result releases the statement: after
        ``first()`` or ``list()``, or when the caller closes the iterator. If the
        driver cannot hand out the keys cursor, the write is rolled back.

        Args:
            query: Registry key or inline SQL.
            params: Named (dict) or positional (tuple/list) parameters.
            mapper: Row mapper; defaults to the first column of each row.
            attributes: Extra metadata exposed to the mapper via the context.
        """
        context = build_context(query, params, self._registry, self._paramstyle, attributes)
        conn = self._connection_manager.connection
        statement = Statement(conn, self._connection_manager.adapter, context, autocommit=True)

        try:
            statement.execute()
        except Exception as e:
            conn.rollback()
            statement.cleanup()
            raise ParameterBindingError(context.label, str(e)) from e

        return GeneratedKeys(mapper if mapper is not None else ColumnMapper(0), statement, context)

    def close(self) -> None:
        """Close the underlying connection."""
        self._connection_manager.close()

    def __enter__(self) -> Engine:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: Any, exc_tb: Any) -> None:
        self.close()

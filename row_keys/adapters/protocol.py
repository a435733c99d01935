"""Database adapter protocol.

Every adapter module MUST implement this protocol so the statement layer
can stay driver-agnostic.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_keys.core.connection import ConnectionConfig


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Parameter binding style: 'named' (:name) or 'pyformat' (%(name)s)."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a DB-API connection."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        """Execute SQL and return a cursor-like object."""
        ...

    def generated_keys(self, cursor: Any, sql: str) -> Any | None:
        """Return the cursor holding generated keys for *cursor*, or None.

        *sql* is the statement that produced *cursor*.
        """
        ...

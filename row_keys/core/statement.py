"""Executed statement and its scoped resources.

A Statement runs one SQL command on a connection and owns every resource
created for it (the driver cursor, generated-key cursors). ``cleanup()``
releases them exactly once; with ``autocommit`` it then commits, while
``abort()`` rolls back instead.
"""

from __future__ import annotations

import logging
from typing import Any

from row_keys.core.cleanup import Cleanable, CleanupRegistry, cursor_cleanable
from row_keys.core.context import StatementContext
from row_keys.core.cursor import KeyCursor
from row_keys.core.exceptions import ExecutionError, ResultTraversalError

logger = logging.getLogger("row_keys.core.statement")


class Statement:
    """One executed SQL statement.

    Args:
        connection: DB-API connection the statement runs on.
        adapter: SyncAdapter for the connection's driver.
        context: Statement context (SQL, label, params).
        autocommit: Commit the connection once resources are released.
    """

    def __init__(
        self,
        connection: Any,
        adapter: Any,
        context: StatementContext,
        *,
        autocommit: bool = False,
    ) -> None:
        self._connection = connection
        self._adapter = adapter
        self._context = context
        self._autocommit = autocommit
        self._cleanables = CleanupRegistry()
        self._cursor: Any = None
        self._owned: list[Any] = []
        self._executed = False

    @property
    def context(self) -> StatementContext:
        return self._context

    @property
    def closed(self) -> bool:
        return self._cleanables.closed

    @property
    def rowcount(self) -> int:
        """Rows affected as reported by the driver, -1 when unknown."""
        if self._cursor is None:
            return -1
        return int(self._cursor.rowcount)

    def execute(self) -> Statement:
        """Run the statement. Driver errors propagate unwrapped."""
        if self._executed:
            raise ExecutionError(f"Statement '{self._context.label}' was already executed")
        if self.closed:
            raise ExecutionError(f"Statement '{self._context.label}' is closed")
        self._executed = True

        logger.debug("Executing %s: %s", self._context.label, self._context.sql)
        self._cursor = self._adapter.execute(
            self._connection, self._context.sql, self._context.params
        )
        self._own(self._cursor)
        return self

    def generated_keys_cursor(self) -> KeyCursor | None:
        """Wrap the driver's generated-keys cursor, or return None if there is none.

        Every call yields a fresh wrapper over the same driver cursor. The
        statement closes each driver cursor once on cleanup; closing a
        wrapper only ends that view. Registering the wrapper is up to the
        caller.
        """
        if self._cursor is None:
            raise ExecutionError(f"Statement '{self._context.label}' has not been executed")
        raw = self._adapter.generated_keys(self._cursor, self._context.sql)
        if raw is None:
            logger.debug("No generated keys for %s", self._context.label)
            return None
        self._own(raw)
        return KeyCursor(raw, release=False)

    def register_cleanable(self, cleanable: Cleanable) -> Cleanable:
        return self._cleanables.add(cleanable)

    def _own(self, raw: Any) -> None:
        # RETURNING drivers hand back the statement cursor itself
        if any(raw is owned for owned in self._owned):
            return
        self._owned.append(raw)
        self.register_cleanable(cursor_cleanable(raw))

    def cleanup(self) -> None:
        """Release all resources once; repeated calls are no-ops.

        Raises:
            ResultTraversalError: If releasing a resource or committing fails.
        """
        if self._cleanables.closed:
            return

        logger.debug("Cleaning up %s (%d resources)", self._context.label, len(self._cleanables))
        try:
            try:
                self._cleanables.cleanup()
            finally:
                # Only a statement the driver accepted has anything to commit
                if self._autocommit and self._cursor is not None:
                    self._connection.commit()
        except Exception as e:
            raise ResultTraversalError(
                "Exception thrown while releasing statement resources", e, self._context
            ) from e

    def abort(self) -> None:
        """Release all resources and roll back instead of committing.

        Only an ``autocommit`` statement rolls back; any other statement is
        left to its caller's transaction, as with ``cleanup()``.

        Raises:
            ResultTraversalError: If releasing a resource or rolling back fails.
        """
        if self._cleanables.closed:
            return

        rollback = self._autocommit and self._cursor is not None
        self._autocommit = False
        try:
            try:
                self.cleanup()
            finally:
                if rollback:
                    logger.debug("Rolling back %s", self._context.label)
                    self._connection.rollback()
        except ResultTraversalError:
            raise
        except Exception as e:
            raise ResultTraversalError(
                "Exception thrown while rolling back statement", e, self._context
            ) from e

    def __enter__(self) -> Statement:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.cleanup()

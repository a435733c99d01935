"""Generated keys returned by an INSERT or UPDATE.

Drivers expose auto-generated column values (identity keys, ``RETURNING``
rows, ``lastrowid``) through a forward-only cursor. ``GeneratedKeys``
offers three ways to consume it:

* ``first()`` - the first key or None;
* ``list()`` / ``list(max_rows)`` - the keys as a list;
* ``iterator()`` - a lazy iterator whose lifetime belongs to the caller.

``first()`` and ``list()`` always release the owning statement's resources
before returning or raising. ``iterator()`` never does.

Each result is single-pass: once ``first()`` or ``list()`` ran, the cursor
is closed and further calls return None or ``[]``.
"""

from __future__ import annotations

import builtins
import logging
import sys
from typing import Generic, NoReturn, TypeVar

from row_keys.core.cleanup import cursor_cleanable
from row_keys.core.context import StatementContext
from row_keys.core.exceptions import ResultTraversalError, UnsupportedContainerError
from row_keys.core.iterator import ResultIterator
from row_keys.core.statement import Statement
from row_keys.mapping.protocol import RowMapper

logger = logging.getLogger("row_keys.core.generated_keys")

T = TypeVar("T")

_TRAVERSAL_FAILED = "Exception thrown while attempting to traverse the result set"


class GeneratedKeys(Generic[T]):
    """Generated keys of an executed statement.

    The generated-keys cursor is taken from the statement and registered for
    cleanup as soon as the result is built, before any row is read.

    Args:
        mapper: Maps each row to a value; called as ``mapper(index, cursor, context)``.
        statement: The executed statement owning the cursor.
        context: Statement context, handed to the mapper untouched.

    Raises:
        ResultTraversalError: If the driver fails to hand out the keys cursor.
            The statement is aborted first, rolling back an autocommit write.
    """

    def __init__(
        self,
        mapper: RowMapper[T],
        statement: Statement,
        context: StatementContext,
    ) -> None:
        self._mapper = mapper
        self._statement = statement
        self._context = context
        try:
            self._cursor = statement.generated_keys_cursor()
        except Exception as e:
            statement.abort()
            raise ResultTraversalError(
                "Exception thrown while fetching generated keys", e, context
            ) from e
        statement.register_cleanable(cursor_cleanable(self._cursor))

    @property
    def context(self) -> StatementContext:
        return self._context

    @property
    def statement(self) -> Statement:
        return self._statement

    def first(self, container_type: type | None = None) -> T | None:
        """Return the first generated key, or None if there is none.

        Raises:
            ResultTraversalError: If advancing the cursor or mapping the row fails.
            UnsupportedContainerError: If a container type is requested.
        """
        if container_type is not None:
            raise UnsupportedContainerError(container_type)

        try:
            cursor = self._cursor
            if cursor is not None and not cursor.is_closed() and cursor.advance():
                return self._mapper(0, cursor, self._context)
            # no generated keys
            return None
        except Exception as e:
            self._raise_traversal_error(e)
        finally:
            self._statement.cleanup()

    def list(self, max_rows: int | type = sys.maxsize) -> builtins.list[T]:
        """Return up to *max_rows* generated keys in row order.

        Reading stops when the cursor is exhausted or *max_rows* rows have
        been mapped, whichever comes first; remaining rows are left unread.
        ``max_rows < 1`` reads nothing.

        Raises:
            ResultTraversalError: If advancing the cursor or mapping a row fails.
            UnsupportedContainerError: If a container type is passed instead of a row count.
        """
        if isinstance(max_rows, type):
            raise UnsupportedContainerError(max_rows)

        try:
            results: builtins.list[T] = []
            cursor = self._cursor
            if max_rows < 1 or cursor is None or cursor.is_closed():
                return results

            index = 0
            while index < max_rows and cursor.advance():
                results.append(self._mapper(index, cursor, self._context))
                index += 1
            logger.debug("Mapped %d generated keys for %s", index, self._context.label)
            return results
        except Exception as e:
            self._raise_traversal_error(e)
        finally:
            self._statement.cleanup()

    def iterator(self) -> ResultIterator[T]:
        """Return a lazy iterator over the generated keys.

        The iterator takes its own cursor from the statement. Nothing is
        released here: close the iterator when done.

        Raises:
            ResultTraversalError: If the driver fails to hand out a cursor.
        """
        try:
            return ResultIterator(self._mapper, self._statement, self._context)
        except Exception as e:
            self._raise_traversal_error(e)

    def _raise_traversal_error(self, error: Exception) -> NoReturn:
        if isinstance(error, ResultTraversalError):
            raise error
        raise ResultTraversalError(_TRAVERSAL_FAILED, error, self._context) from error

    def __repr__(self) -> str:
        return f"GeneratedKeys(statement={self._context.label!r}, mapper={self._mapper!r})"

"""Lazy iteration over generated keys."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from row_keys.core.cleanup import cursor_cleanable
from row_keys.core.context import StatementContext
from row_keys.core.exceptions import ResultTraversalError
from row_keys.core.statement import Statement
from row_keys.mapping.protocol import RowMapper

logger = logging.getLogger("row_keys.core.iterator")

T = TypeVar("T")


class ResultIterator(Iterator[T], Generic[T]):
    """Forward-only, single-pass iterator of mapped rows.

    The iterator takes its own cursor from the statement when it is built.
    It never releases anything by itself, not even once the rows run out:
    call ``close()`` (or use it as a context manager) when done, or leave it
    to whoever cleans up the owning statement.
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
        self._index = 0
        self._cursor = statement.generated_keys_cursor()
        statement.register_cleanable(cursor_cleanable(self._cursor))

    def __iter__(self) -> ResultIterator[T]:
        return self

    def __next__(self) -> T:
        cursor = self._cursor
        if cursor is None or cursor.is_closed():
            raise StopIteration
        try:
            if not cursor.advance():
                raise StopIteration
            value = self._mapper(self._index, cursor, self._context)
        except StopIteration:
            raise
        except ResultTraversalError:
            raise
        except Exception as e:
            raise ResultTraversalError(
                "Exception thrown while attempting to traverse the result set", e, self._context
            ) from e
        self._index += 1
        return value

    def close(self) -> None:
        """Release the owning statement's resources."""
        logger.debug("Closing result iterator for %s", self._context.label)
        self._statement.cleanup()

    def __enter__(self) -> ResultIterator[T]:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: Any, exc_tb: Any) -> None:
        self.close()

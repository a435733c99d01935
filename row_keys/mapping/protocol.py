"""Row mapper protocol.

A row mapper is called once per row with the zero-based row index, the
cursor positioned on that row, and the statement context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from row_keys.core.context import StatementContext
    from row_keys.core.cursor import KeyCursor

T_co = TypeVar("T_co", covariant=True)


class RowMapper(Protocol[T_co]):
    """Base row mapper protocol. Plain functions satisfy it."""

    def __call__(self, index: int, cursor: KeyCursor, context: StatementContext) -> T_co:
        """Map the cursor's current row to a value."""
        ...

"""Built-in row mappers for generated keys."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from row_keys.mapping.model import ModelMapper

if TYPE_CHECKING:
    from row_keys.core.context import StatementContext
    from row_keys.core.cursor import KeyCursor

T = TypeVar("T")


class ColumnMapper:
    """Map each row to the value of a single column.

    Args:
        column: Column position or name. Defaults to the first column,
            which is where drivers put a single generated key.
        converter: Optional callable applied to the raw value.
    """

    def __init__(
        self,
        column: int | str = 0,
        converter: Callable[[Any], Any] | None = None,
    ) -> None:
        self._column = column
        self._converter = converter

    def __call__(self, index: int, cursor: KeyCursor, context: StatementContext) -> Any:
        value = cursor.read_column(self._column)
        if self._converter is not None and value is not None:
            return self._converter(value)
        return value

    def __repr__(self) -> str:
        return f"ColumnMapper(column={self._column!r})"


class DictMapper:
    """Map each row to a column-name -> value dict."""

    def __call__(
        self, index: int, cursor: KeyCursor, context: StatementContext
    ) -> dict[str, Any]:
        return cursor.as_dict()


class ModelRowMapper(Generic[T]):
    """Map each row to a dataclass, Pydantic model or plain class."""

    def __init__(self, target_class: type[T], aliases: dict[str, str] | None = None) -> None:
        self._model_mapper = ModelMapper(target_class, aliases=aliases)

    def __call__(self, index: int, cursor: KeyCursor, context: StatementContext) -> T:
        return self._model_mapper.map_one(cursor.as_dict())

    def __repr__(self) -> str:
        return f"ModelRowMapper({self._model_mapper.target_class.__name__})"

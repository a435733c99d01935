"""Row-dict to model mapper.

Supports dataclasses, Pydantic models, and plain classes.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from row_keys.core.exceptions import ColumnMismatchError

T = TypeVar("T")


class ModelMapper(Generic[T]):
    """Build *target_class* instances from row dicts.

    Detection order:
    1. Pydantic BaseModel -> model_validate(row)
    2. dataclass -> target_class(**row), unknown columns dropped
    3. Plain class -> target_class(**row)

    Args:
        target_class: The class to construct from row data.
        aliases: Optional column-name to field-name mapping.
    """

    def __init__(
        self,
        target_class: type[T],
        aliases: dict[str, str] | None = None,
    ) -> None:
        self._target_class = target_class
        self._aliases = aliases or {}
        self._is_pydantic = isinstance(target_class, type) and issubclass(
            target_class, BaseModel
        )
        self._fields: set[str] | None = None
        if dataclasses.is_dataclass(target_class):
            self._fields = {f.name for f in dataclasses.fields(target_class) if f.init}

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    def _prepare(self, row: dict[str, Any]) -> dict[str, Any]:
        data = {self._aliases.get(key, key): value for key, value in row.items()}
        if self._fields is not None:
            data = {key: value for key, value in data.items() if key in self._fields}
        return data

    def map_one(self, row: dict[str, Any]) -> T:
        """Map a single row to a target_class instance."""
        data = self._prepare(row)

        if self._is_pydantic:
            try:
                return self._target_class.model_validate(data)  # type: ignore[attr-defined, no-any-return]
            except Exception as e:
                raise ColumnMismatchError(self._target_class.__name__, [str(e)]) from e

        try:
            return self._target_class(**data)
        except TypeError as e:
            raise ColumnMismatchError(self._target_class.__name__, [str(e)]) from e

    def map_many(self, rows: list[dict[str, Any]]) -> list[T]:
        return [self.map_one(row) for row in rows]

"""RowKeys exception hierarchy.

All exceptions are RowKeys-specific. Raw driver exceptions are never
raised to callers directly; they are chained as ``__cause__``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from row_keys.core.context import StatementContext


class RowKeysError(Exception):
    """Base exception for all RowKeys errors."""


# --- Registry ---


class RegistryError(RowKeysError):
    """Base for SQL registry errors."""


class QueryNotFoundError(RegistryError):
    """Raised when a named query cannot be found in the registry."""

    def __init__(self, query_name: str) -> None:
        self.query_name = query_name
        super().__init__(f"Query not found: '{query_name}'")


class DuplicateQueryError(RegistryError):
    """Raised when two SQL files resolve to the same namespace key."""

    def __init__(self, query_name: str, path_a: str, path_b: str) -> None:
        self.query_name = query_name
        super().__init__(f"Duplicate query name '{query_name}': {path_a} and {path_b}")


# --- Execution ---


class ExecutionError(RowKeysError):
    """Base for statement execution errors."""


class ParameterBindingError(ExecutionError):
    """Raised when the driver rejects a statement or its parameters."""

    def __init__(self, query_name: str, detail: str) -> None:
        self.query_name = query_name
        super().__init__(f"Parameter binding error for '{query_name}': {detail}")


class ResultTraversalError(ExecutionError):
    """Raised when walking a result cursor fails at the driver level.

    Covers advancing, reading, mapping and closing the cursor. The original
    driver fault is kept on ``cause`` (and chained as ``__cause__`` by the
    raiser), the execution context on ``context``.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        context: StatementContext | None = None,
    ) -> None:
        self.message = message
        self.cause = cause
        self.context = context
        detail = message
        if context is not None:
            detail = f"{detail} [statement '{context.label}']"
        if cause is not None:
            detail = f"{detail}: {cause}"
        super().__init__(detail)


class UnsupportedContainerError(RowKeysError, NotImplementedError):
    """Raised when results are requested in a caller-chosen container type."""

    def __init__(self, container_type: Any) -> None:
        self.container_type = container_type
        name = getattr(container_type, "__name__", repr(container_type))
        super().__init__(f"Collecting generated keys into {name} is not supported")


# --- Mapping ---


class MappingError(RowKeysError):
    """Base for mapping errors."""


class ColumnMismatchError(MappingError):
    """Raised when required fields cannot be mapped from row columns."""

    def __init__(self, target_class: str, missing_fields: list[str]) -> None:
        self.target_class = target_class
        self.missing_fields = missing_fields
        super().__init__(f"Cannot map to {target_class}: missing fields {missing_fields}")


# --- Adapter ---


class AdapterError(RowKeysError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""

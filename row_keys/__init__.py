"""RowKeys - generated-key results for SQL statements."""

from __future__ import annotations

import logging

from row_keys.core.cleanup import CleanupRegistry, cursor_cleanable
from row_keys.core.connection import ConnectionConfig, ConnectionManager
from row_keys.core.context import StatementContext
from row_keys.core.cursor import KeyCursor, StaticCursor
from row_keys.core.engine import Engine
from row_keys.core.exceptions import (
    AdapterError,
    ColumnMismatchError,
    ConnectionError,  # noqa: A004
    DuplicateQueryError,
    ExecutionError,
    MappingError,
    ParameterBindingError,
    QueryNotFoundError,
    RegistryError,
    ResultTraversalError,
    RowKeysError,
    UnsupportedContainerError,
)
from row_keys.core.generated_keys import GeneratedKeys
from row_keys.core.iterator import ResultIterator
from row_keys.core.registry import SQLRegistry
from row_keys.core.statement import Statement
from row_keys.mapping import ColumnMapper, DictMapper, ModelMapper, ModelRowMapper, RowMapper

logging.getLogger("row_keys").addHandler(logging.NullHandler())

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    # Engine
    "Engine",
    # Registry
    "SQLRegistry",
    # Statement
    "Statement",
    "StatementContext",
    "CleanupRegistry",
    "cursor_cleanable",
    # Results
    "GeneratedKeys",
    "ResultIterator",
    "KeyCursor",
    "StaticCursor",
    # Mapping
    "RowMapper",
    "ColumnMapper",
    "DictMapper",
    "ModelRowMapper",
    "ModelMapper",
    # Exceptions
    "RowKeysError",
    "RegistryError",
    "QueryNotFoundError",
    "DuplicateQueryError",
    "ExecutionError",
    "ParameterBindingError",
    "ResultTraversalError",
    "UnsupportedContainerError",
    "MappingError",
    "ColumnMismatchError",
    "AdapterError",
    "ConnectionError",
]

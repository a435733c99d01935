"""Mapping layer - turn generated-key rows into typed values."""

from __future__ import annotations

from row_keys.mapping.mappers import ColumnMapper, DictMapper, ModelRowMapper
from row_keys.mapping.model import ModelMapper
from row_keys.mapping.protocol import RowMapper

__all__ = [
    "RowMapper",
    "ColumnMapper",
    "DictMapper",
    "ModelRowMapper",
    "ModelMapper",
]

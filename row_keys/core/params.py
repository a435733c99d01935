"""SQL parameter normalization and statement resolution.

Converts `:name` parameter syntax to driver-specific format and turns a
query reference (registry key or inline SQL) into a StatementContext.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from row_keys.core.context import StatementContext

if TYPE_CHECKING:
    from row_keys.core.registry import SQLRegistry

# Matches :name but not ::typecast and not inside words
_PARAM_PATTERN = re.compile(r"(?<![:\w]):([a-zA-Z_]\w*)")

# Matches single-quoted string literals (with escaped quotes handled)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\.)*'")

INLINE_LABEL = "<inline>"


def normalize_params(sql: str, paramstyle: str) -> str:
    """Convert :name parameters to the target param style.

    Args:
        sql: SQL string with :name parameters.
        paramstyle: Target style - 'named' (no conversion) or 'pyformat' (%(name)s).

    Returns:
        SQL with parameters converted to the target style.
    """
    if paramstyle == "named":
        return sql
    return _convert_to_pyformat(sql)


@lru_cache(maxsize=256)
def _convert_to_pyformat(sql: str) -> str:
    """Convert :name params to %(name)s, preserving string literals."""
    parts: list[str] = []
    last_end = 0

    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append(_PARAM_PATTERN.sub(r"%(\1)s", sql[last_end:start]))
        parts.append(match.group())
        last_end = end

    if last_end < len(sql):
        parts.append(_PARAM_PATTERN.sub(r"%(\1)s", sql[last_end:]))

    return "".join(parts)


def is_raw_sql(query: str) -> bool:
    """Return True if query is an inline SQL string rather than a registry key.

    Registry keys use dot-notation (e.g. ``user.insert``) and never contain
    whitespace; any SQL statement contains at least one space.
    """
    return any(c.isspace() for c in query)


def coerce_params(
    params: Mapping[str, Any] | tuple[Any, ...] | list[Any] | Any,
) -> dict[str, Any] | tuple[Any, ...] | None:
    """Normalize *params* to a dict, tuple, or None.

    * ``None`` / mapping -> ``None`` / ``dict`` (named binding).
    * ``tuple`` / ``list`` -> ``tuple`` (positional binding).
    * Any other scalar -> single-element tuple.
    """
    if params is None:
        return None
    if isinstance(params, Mapping):
        return dict(params)
    if isinstance(params, (tuple, list)):
        return tuple(params)
    return (params,)


def resolve_sql(query: str, registry: SQLRegistry) -> tuple[str, str]:
    """Return ``(sql_text, label)`` for *query*.

    Inline SQL is returned as-is with the ``<inline>`` label; anything else
    is looked up in *registry* and labelled with its key.
    """
    if is_raw_sql(query):
        return query, INLINE_LABEL
    return registry.get(query), query


def build_context(
    query: str,
    params: Any,
    registry: SQLRegistry,
    paramstyle: str,
    attributes: Mapping[str, Any] | None = None,
) -> StatementContext:
    """Resolve, normalize and bind *query* into a StatementContext."""
    sql, label = resolve_sql(query, registry)
    return StatementContext(
        sql=normalize_params(sql, paramstyle),
        label=label,
        params=coerce_params(params),
        attributes=attributes or {},
    )

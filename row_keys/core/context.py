"""Statement execution context.

Carried alongside every statement and handed to row mappers untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class StatementContext:
    """Read-only metadata describing one statement execution."""

    sql: str
    label: str = "<inline>"
    params: dict[str, Any] | tuple[Any, ...] | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze caller metadata so mappers cannot mutate it
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def attribute(self, name: str, default: Any = None) -> Any:
        """Look up a caller-supplied attribute."""
        return self.attributes.get(name, default)

"""SQL Registry - named statements loaded from files or registered in code.

Namespace convention:
    sql/user/insert.sql          -> "user.insert"
    sql/billing/invoice/add.sql  -> "billing.invoice.add"
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from row_keys.core.exceptions import DuplicateQueryError, QueryNotFoundError, RegistryError


class SQLRegistry:
    """Named SQL statements.

    Args:
        root_dir: Optional directory scanned recursively for ``*.sql`` files.
        queries: Optional mapping of name -> SQL registered up front.

    Raises:
        DuplicateQueryError: If two sources resolve to the same name.
    """

    def __init__(
        self,
        root_dir: Path | str | None = None,
        queries: Mapping[str, str] | None = None,
    ) -> None:
        self._root_dir = Path(root_dir) if root_dir is not None else None
        self._queries: dict[str, str] = {}
        self._sources: dict[str, str] = {}
        if self._root_dir is not None:
            self._load(self._root_dir)
        for name, sql in (queries or {}).items():
            self.register(name, sql)

    def _load(self, root_dir: Path) -> None:
        if not root_dir.exists():
            return

        for sql_file in sorted(root_dir.rglob("*.sql")):
            parts = list(sql_file.relative_to(root_dir).parts)
            parts[-1] = parts[-1].removesuffix(".sql")
            self._add(".".join(parts), sql_file.read_text(encoding="utf-8"), str(sql_file))

    def register(self, query_name: str, sql: str) -> None:
        """Register a statement under *query_name*.

        Raises:
            RegistryError: If the name contains whitespace.
            DuplicateQueryError: If the name is already taken.
        """
        if not query_name or any(c.isspace() for c in query_name):
            raise RegistryError(f"Invalid query name: {query_name!r}")
        self._add(query_name, sql, "<registered>")

    def _add(self, query_name: str, sql: str, source: str) -> None:
        if query_name in self._queries:
            raise DuplicateQueryError(query_name, self._sources[query_name], source)
        self._queries[query_name] = sql.strip()
        self._sources[query_name] = source

    def get(self, query_name: str) -> str:
        """Look up SQL text by namespace-qualified name.

        Raises:
            QueryNotFoundError: If no query matches the given name.
        """
        try:
            return self._queries[query_name]
        except KeyError:
            raise QueryNotFoundError(query_name) from None

    def has(self, query_name: str) -> bool:
        return query_name in self._queries

    @property
    def query_names(self) -> list[str]:
        """All registered names, sorted alphabetically."""
        return sorted(self._queries)

    def __len__(self) -> int:
        return len(self._queries)

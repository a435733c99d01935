"""Cleanup registry for statement-scoped resources.

Resources (cursors, mostly) are registered as zero-argument callables and
released exactly once, most recently registered first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger("row_keys.core.cleanup")

Cleanable = Callable[[], Any]


def _noop() -> None:
    return None


def cursor_cleanable(cursor: Any) -> Cleanable:
    """Return a cleanable that closes *cursor* at most once.

    A ``None`` cursor (driver returned no result) yields a no-op.
    """
    if cursor is None:
        return _noop

    released = False

    def _close() -> None:
        nonlocal released
        if released:
            return
        released = True
        cursor.close()

    return _close


class CleanupRegistry:
    """Collection of cleanables released together.

    ``cleanup()`` runs every registered cleanable once. A failing cleanable
    does not stop the others; the first failure is re-raised once all have
    run. Later calls do nothing.
    """

    def __init__(self) -> None:
        self._cleanables: list[Cleanable] = []
        self._closed = False

    def add(self, cleanable: Cleanable) -> Cleanable:
        """Register a cleanable. Returns it for convenience."""
        if self._closed:
            # Registry already drained; release immediately rather than leak
            logger.debug("Registry closed, releasing late cleanable immediately")
            cleanable()
            return cleanable
        self._cleanables.append(cleanable)
        return cleanable

    def cleanup(self) -> None:
        """Release all registered resources, last registered first."""
        if self._closed:
            return
        self._closed = True

        first_error: BaseException | None = None
        while self._cleanables:
            cleanable = self._cleanables.pop()
            try:
                cleanable()
            except Exception as e:
                logger.warning("Cleanable %r failed: %s", cleanable, e)
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        """Number of resources still waiting to be released."""
        return len(self._cleanables)

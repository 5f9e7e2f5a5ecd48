"""Monotonic per-collection identifier allocation."""

from __future__ import annotations

import threading

from chirpy.models import Document

# Collections whose records carry their own allocated id. Refresh tokens are
# keyed by owner id and never allocate.
SEQUENCED_COLLECTIONS: tuple[str, ...] = ("chirps", "users")


class IdAllocator:
    """
    Hand out unique, strictly increasing integers per collection.

    Each collection has its own counter and its own lock; the lock is held only
    around the increment, never around the write that follows. Ids handed out
    for records that never reach disk (crash, write failure) are skipped for
    good: gaps are allowed, reuse is not.
    """

    def __init__(self, kinds: tuple[str, ...] = SEQUENCED_COLLECTIONS) -> None:
        self._last: dict[str, int] = {kind: 0 for kind in kinds}
        self._locks: dict[str, threading.Lock] = {kind: threading.Lock() for kind in kinds}

    def seed(self, document: Document) -> None:
        """Set every counter to the highest id found in ``document`` (0 if empty)."""
        for kind in self._last:
            records = document.collection(kind)
            with self._locks[kind]:
                self._last[kind] = max(records, default=0)

    def next(self, kind: str) -> int:
        """Increment and return the counter for ``kind``.

        :raises ValueError: If ``kind`` is not a sequenced collection.
        """
        lock = self._lock_for(kind)
        with lock:
            self._last[kind] += 1
            return self._last[kind]

    def current(self, kind: str) -> int:
        """Return the last id handed out for ``kind`` without allocating."""
        with self._lock_for(kind):
            return self._last[kind]

    def _lock_for(self, kind: str) -> threading.Lock:
        try:
            return self._locks[kind]
        except KeyError:
            raise ValueError(f"No id sequence for collection {kind!r}") from None

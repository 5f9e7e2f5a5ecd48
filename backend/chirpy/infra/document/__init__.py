"""File-backed document store with per-collection id allocation."""

from __future__ import annotations

from .locks import ReadWriteLock
from .sequences import IdAllocator
from .store import JSONDocumentStore

__all__ = ["IdAllocator", "JSONDocumentStore", "ReadWriteLock"]

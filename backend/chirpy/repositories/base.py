"""Generic repository base over the JSON document store.

This module centralizes persistence-only concerns shared by all repositories:
- Deterministic listing: records are always materialized and sorted by key,
  because the underlying mappings have no meaningful iteration order.
- Equality filtering restricted to a per-repository whitelist.
- Update/modify/delete on whole records, each one a single ``store.mutate()``
  block; ``modify`` reads the current record inside that block.
- No business logic: services own validation, ownership and authorization.

Design decisions
----------------
* Repositories MUST remain thin and persistence-focused.
* Every write goes through ``JSONDocumentStore.mutate`` so load, mutate and
  persist happen under the store's mutation lock.
* Storage-level deletes are idempotent; services decide whether a missing
  record should surface as ``NotFoundError``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from chirpy.infra.document import JSONDocumentStore
from chirpy.services._shared.errors import NotFoundError

E = TypeVar("E")  # record dataclass type


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single collection.

    Subclasses MUST define:

    * ``collection``: document collection name (``"chirps"``, ``"users"``, ``"tokens"``).
    * ``entity``: human-readable entity name used in ``NotFoundError``.

    Subclasses MAY override:

    * ``_key`` when records are not keyed by their ``id`` attribute.
    * ``_filterable_fields`` to enable equality filters.
    """

    collection: str
    entity: str

    def __init__(self, store: JSONDocumentStore) -> None:
        """
        :param store: Document store shared by every repository of the app.
        :type store: JSONDocumentStore
        """
        self.store = store

    # ------------------------------ Extensibility ----------------------------

    def _key(self, record: E) -> int:
        """Return the collection key of ``record`` (its ``id`` by default)."""
        return int(getattr(record, "id"))

    def _filterable_fields(self) -> set[str]:
        """Whitelist of record attributes usable in ``list(filters=...)``.

        Unknown filter keys raise ``ValueError`` rather than being ignored, so
        a typo never silently widens a result set.
        """
        return set()

    # --------------------------------- Reads ---------------------------------

    def _records(self) -> dict[int, E]:
        return self.store.load().collection(self.collection)

    def list(self, filters: Mapping[str, Any] | None = None) -> list[E]:
        """Return every record, optionally filtered by equality, sorted by key.

        :param filters: ``{attribute: value}`` equality predicates.
        :type filters: Mapping[str, Any] | None
        :returns: Records in ascending key order.
        :rtype: list[E]
        :raises ValueError: If a filter key is not whitelisted.
        """
        filters = dict(filters or {})
        unknown = set(filters) - self._filterable_fields()
        if unknown:
            raise ValueError(f"Unknown or non-filterable fields: {sorted(unknown)}")
        records = self._records()
        return [
            records[key]
            for key in sorted(records)
            if all(getattr(records[key], f) == v for f, v in filters.items())
        ]

    def get(self, key: int) -> E | None:
        """Retrieve a single record by key, or ``None``."""
        return self._records().get(key)

    def get_or_raise(self, key: int) -> E:
        """Retrieve a single record by key.

        :raises NotFoundError: If no record has that key.
        """
        record = self.get(key)
        if record is None:
            raise NotFoundError(self.entity, key)
        return record

    # -------------------------------- Writes ---------------------------------

    def update(self, record: E) -> E:
        """Replace the stored record having the same key.

        The write happens even when nothing changed.

        :raises NotFoundError: If no record has that key.
        """
        key = self._key(record)
        with self.store.mutate() as doc:
            records = doc.collection(self.collection)
            if key not in records:
                raise NotFoundError(self.entity, key)
            self._check_update(doc, record)
            records[key] = record
        return record

    def modify(self, key: int, change: Callable[[E], E]) -> E:
        """Read-modify-write the record with ``key`` in one mutation block.

        ``change`` receives the stored record and returns its replacement. It
        runs under the store's mutation lock, so it must not touch the store
        itself and should stay cheap (hash passwords before calling).

        :raises NotFoundError: If no record has that key.
        """
        with self.store.mutate() as doc:
            records = doc.collection(self.collection)
            current = records.get(key)
            if current is None:
                raise NotFoundError(self.entity, key)
            updated = change(current)
            self._check_update(doc, updated)
            records[key] = updated
        return updated

    def _check_update(self, doc: Any, record: E) -> None:
        """Hook for uniqueness checks performed inside the mutation block."""

    def delete(self, key: int) -> bool:
        """Remove the record with ``key``.

        Idempotent: removing an absent key is not an error and leaves the
        document untouched.

        :returns: ``True`` if a record was removed.
        """
        with self.store.mutate() as doc:
            removed = doc.collection(self.collection).pop(key, None)
        return removed is not None

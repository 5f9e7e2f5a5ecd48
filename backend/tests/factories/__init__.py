"""Factory Boy helpers wired to the per-test document store."""

from __future__ import annotations

import factory

from chirpy.infra.document import JSONDocumentStore


class DocumentStoreHolder:
    """Store the document store provided by the pytest fixture layer."""

    _store: JSONDocumentStore | None = None

    @classmethod
    def set(cls, store: JSONDocumentStore | None) -> None:
        cls._store = store

    @classmethod
    def get(cls) -> JSONDocumentStore:
        """Return the registered store.

        Raises
        ------
        RuntimeError
            If factories are used without the ``store`` fixture wiring.
        """
        if cls._store is None:
            raise RuntimeError("Factories store not set. Did you pass the 'store' fixture?")
        return cls._store


class BaseFactory(factory.Factory):
    """Base class persisting records through the repositories.

    Subclasses implement ``_persist(store, **kwargs)``; ids are always
    allocated by the store, never by the factory.
    """

    class Meta:
        abstract = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        return cls._persist(DocumentStoreHolder.get(), **kwargs)

    @classmethod
    def _persist(cls, store: JSONDocumentStore, **kwargs):  # pragma: no cover - abstract
        raise NotImplementedError

"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import logging

from flask import Flask, current_app
from flask_jwt_extended import JWTManager

from chirpy.infra.document import JSONDocumentStore

log = logging.getLogger(__name__)

STORE_KEY = "document_store"

# Global singletons (import-safe)
jwt = JWTManager()


def init_app(app: Flask) -> None:
    """Initialize JWT support and open the document store.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances.

    Raises
    ------
    chirpy.services._shared.errors.StorageError
        If the backing document cannot be created or read. The factory lets
        it propagate: the process must not start serving.
    """
    jwt.init_app(app)

    store = JSONDocumentStore(
        app.config["DATABASE_PATH"],
        reset=bool(app.config.get("DATABASE_RESET", False)),
    )
    app.extensions[STORE_KEY] = store
    log.info("store.ready path=%s counts=%s", store.path, store.stats())


def get_store(app: Flask | None = None) -> JSONDocumentStore:
    """Return the document store bound to ``app`` (or the current app)."""
    target = app or current_app
    store = target.extensions.get(STORE_KEY)
    if store is None:
        raise RuntimeError("Document store is not initialized. Call init_app() first.")
    return store

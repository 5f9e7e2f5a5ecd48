"""
chirpy.services._shared.ports
=============================

*Ports* (hexagonal interfaces) that keep :class:`~chirpy.services.auth.service.AuthService`
independent from the JWT library and from the document store.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the abstraction for signing and
    decoding access tokens.

- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore`, the stateful store for refresh
    credentials (one per user), plus an in-memory implementation.

Concrete adapters live under ``chirpy.infra`` (JWT) and
``chirpy.repositories`` (document-backed refresh tokens).
"""

from __future__ import annotations

from .refresh_token_store import InMemoryRefreshTokenStore, RefreshTokenStore
from .token_provider import TokenProvider

__all__ = [
    "InMemoryRefreshTokenStore",
    "RefreshTokenStore",
    "TokenProvider",
]

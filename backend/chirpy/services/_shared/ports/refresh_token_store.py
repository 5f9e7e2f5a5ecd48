from __future__ import annotations

import threading
from datetime import datetime
from typing import Protocol

from chirpy.models import RefreshToken


class RefreshTokenStore(Protocol):
    """
    Stateful store for refresh credentials.

    Credentials are keyed by owner: saving a new one for a user replaces the
    previous one (single active session per account). Expiry is checked by the
    caller at use time; stores never sweep expired entries.
    """

    def save(self, *, user_id: int, token: str, expires_at: datetime) -> RefreshToken:
        """Store ``token`` for ``user_id``, superseding any previous credential."""

    def get_by_token(self, token: str) -> RefreshToken | None:
        """Return the credential holding ``token`` (expired or not), if any."""

    def delete_by_token(self, token: str) -> bool:
        """Delete the credential holding ``token``. :returns: True if it existed."""


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-memory refresh credential store.

    .. note::
       Uses a threading lock so it can stand in for the document-backed store
       in concurrent unit tests.
    """

    def __init__(self) -> None:
        self._by_user: dict[int, RefreshToken] = {}
        self._lock = threading.Lock()

    def save(self, *, user_id: int, token: str, expires_at: datetime) -> RefreshToken:
        record = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
        with self._lock:
            self._by_user[user_id] = record
        return record

    def get_by_token(self, token: str) -> RefreshToken | None:
        with self._lock:
            return next((t for t in self._by_user.values() if t.token == token), None)

    def delete_by_token(self, token: str) -> bool:
        with self._lock:
            owner = next((uid for uid, t in self._by_user.items() if t.token == token), None)
            if owner is None:
                return False
            del self._by_user[owner]
            return True

"""Document-backed refresh credential store."""

from __future__ import annotations

from datetime import datetime

from chirpy.models import Document, RefreshToken
from chirpy.repositories.base import BaseRepository
from chirpy.services._shared.ports import RefreshTokenStore


def _find_by_token(doc: Document, token: str) -> RefreshToken | None:
    return next((t for t in doc.tokens.values() if t.token == token), None)


class RefreshTokenRepository(BaseRepository[RefreshToken], RefreshTokenStore):
    """
    Refresh credentials keyed by owner id inside the ``tokens`` collection.

    Implements the :class:`RefreshTokenStore` port used by ``AuthService``.
    """

    collection = "tokens"
    entity = "RefreshToken"

    def _key(self, record: RefreshToken) -> int:
        return record.user_id

    def save(self, *, user_id: int, token: str, expires_at: datetime) -> RefreshToken:
        record = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
        with self.store.mutate() as doc:
            # Keyed by owner: a new login supersedes the previous session.
            doc.tokens[user_id] = record
        return record

    def get_by_token(self, token: str) -> RefreshToken | None:
        return _find_by_token(self.store.load(), token)

    def delete_by_token(self, token: str) -> bool:
        with self.store.mutate() as doc:
            record = _find_by_token(doc, token)
            if record is None:
                return False
            del doc.tokens[record.user_id]
        return True

"""Refresh credential record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class RefreshToken:
    """
    Server-side refresh credential, at most one per user.

    :param user_id: Owner user id (also the collection key).
    :param token: 64-character lowercase hex string (32 random bytes).
    :param expires_at: Timezone-aware UTC expiry.
    """

    user_id: int
    token: str
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        """Return ``True`` while ``now`` is strictly before the expiry."""
        return now < self.expires_at

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for issuing and decoding signed access tokens.

    ``decode`` MUST verify signature, issuer and expiry, and raise
    :class:`~chirpy.services._shared.errors.UnauthorizedError` on any failure.
    """

    def create_access_token(self, *, identity: str, expires_delta: timedelta) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...

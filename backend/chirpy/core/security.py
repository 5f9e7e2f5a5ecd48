"""Password hashing built on Werkzeug's security helpers."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from functools import lru_cache

from werkzeug.security import check_password_hash, generate_password_hash

from chirpy.services._shared.errors import ValidationFailure

DEFAULT_HASH_METHOD = "scrypt:32768:8:1"


@dataclass(frozen=True, slots=True)
class PasswordHasher:
    """
    One-way adaptive hashing with a fixed work factor.

    :param method: Werkzeug method string, e.g. ``"scrypt:32768:8:1"`` or
        ``"pbkdf2:sha256:600000"``. The digest records the method, so changing
        it later does not break verification of existing digests.
    """

    method: str = DEFAULT_HASH_METHOD

    def hash(self, raw: str) -> str:
        """
        Hash a plain text password.

        :param raw: Plain text password.
        :returns: Salted digest, safe to persist.
        :raises ValidationFailure: If the password is empty or not a string.
        """
        if not isinstance(raw, str) or not raw:
            raise ValidationFailure("Password must be a non-empty string.")
        return generate_password_hash(raw, method=self.method)

    def verify(self, digest: str, raw: str) -> bool:
        """
        Verify a password against a stored digest.

        Comparison is constant time. A malformed or unknown-method digest is
        a plain mismatch, never an exception.

        :returns: ``True`` if it matches; otherwise ``False``.
        """
        if not digest or not isinstance(raw, str):
            return False
        try:
            # ``check_password_hash`` is not typed and returns ``Any``; coerce to bool for mypy.
            return bool(check_password_hash(digest, raw))
        except (ValueError, TypeError):
            return False

    def verify_absent(self, raw: str) -> bool:
        """
        Run a full verification against a placeholder digest and fail.

        Used when there is no stored digest to check, so a missing account
        costs the same hashing work as a wrong password.

        :returns: Always ``False``.
        """
        self.verify(_placeholder_digest(self.method), raw)
        return False


@lru_cache(maxsize=8)
def _placeholder_digest(method: str) -> str:
    return generate_password_hash(secrets.token_hex(16), method=method)

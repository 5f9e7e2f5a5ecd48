"""User record definition."""

from __future__ import annotations

from dataclasses import dataclass, field

from chirpy.services._shared.errors import ValidationFailure


@dataclass(frozen=True, slots=True)
class User:
    """
    Account identity.

    Fields
    ------
    id : int
        Identifier allocated by the store.
    email : str
        Login email, stored normalized (lowercase, trimmed) and unique.
    password_hash : str
        Opaque digest produced by :class:`chirpy.core.security.PasswordHasher`.
        Excluded from ``repr`` so it never ends up in logs.
    is_chirpy_red : bool
        Premium flag toggled by the payment-provider webhook.
    """

    id: int
    email: str
    password_hash: str = field(repr=False)
    is_chirpy_red: bool = False


def normalize_email(value: str) -> str:
    """
    Normalize and minimally validate an email address.

    :param value: Email to normalize.
    :returns: Lowercased, trimmed email.
    :raises ValidationFailure: If the email is missing or malformed.
    """
    if not value or not isinstance(value, str):
        raise ValidationFailure("Email is required.")
    v = value.strip().lower()
    # Minimal sanity check; full validation happens at API layer.
    if "@" not in v or not v.split("@")[-1]:
        raise ValidationFailure("Email format looks invalid.")
    return v

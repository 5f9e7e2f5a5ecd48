"""Record types persisted in the JSON document."""

from __future__ import annotations

from .chirp import BANNED_WORDS, CHIRP_MAX_LENGTH, MASK_TOKEN, Chirp, clean_chirp_body
from .document import COLLECTIONS, Document
from .token import RefreshToken
from .user import User, normalize_email

__all__ = [
    "BANNED_WORDS",
    "CHIRP_MAX_LENGTH",
    "COLLECTIONS",
    "MASK_TOKEN",
    "Chirp",
    "Document",
    "RefreshToken",
    "User",
    "clean_chirp_body",
    "normalize_email",
]

"""Chirp record and body sanitisation rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from chirpy.services._shared.errors import ValidationFailure

CHIRP_MAX_LENGTH: Final[int] = 140
MASK_TOKEN: Final[str] = "****"
BANNED_WORDS: Final[frozenset[str]] = frozenset({"kerfuffle", "sharbert", "fornax"})


@dataclass(frozen=True, slots=True)
class Chirp:
    """
    A short text post owned by exactly one user.

    Chirps are immutable once created; the only lifecycle change is deletion.

    :param id: Identifier allocated by the store (``> 0``).
    :param body: Cleaned text (at most :data:`CHIRP_MAX_LENGTH` characters).
    :param user_id: Owner user id.
    """

    id: int
    body: str
    user_id: int


def clean_chirp_body(text: str) -> str:
    """
    Validate a chirp body and mask banned words.

    The length check runs on the raw text. Words are split on single spaces
    so word count and spacing are preserved; a word is masked only when it
    matches a banned word as a whole, ignoring case (``Fornax!`` is kept).

    :param text: Raw body supplied by the caller.
    :returns: The cleaned body.
    :raises ValidationFailure: If the body exceeds the maximum length.
    """
    if len(text) > CHIRP_MAX_LENGTH:
        raise ValidationFailure(f"Chirp is too long (max {CHIRP_MAX_LENGTH} characters).")
    words = text.split(" ")
    return " ".join(MASK_TOKEN if word.lower() in BANNED_WORDS else word for word in words)

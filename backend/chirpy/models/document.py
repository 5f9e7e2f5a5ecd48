"""In-memory view of the whole persisted document."""

from __future__ import annotations

from dataclasses import dataclass, field

from .chirp import Chirp
from .token import RefreshToken
from .user import User

COLLECTIONS: tuple[str, ...] = ("chirps", "users", "tokens")


@dataclass(slots=True)
class Document:
    """
    The three keyed collections loaded from disk.

    ``chirps`` and ``users`` are keyed by record id; ``tokens`` is keyed by
    owner user id, which is what enforces one refresh credential per user.
    Mapping iteration order carries no meaning; sort before exposing.
    """

    chirps: dict[int, Chirp] = field(default_factory=dict)
    users: dict[int, User] = field(default_factory=dict)
    tokens: dict[int, RefreshToken] = field(default_factory=dict)

    def collection(self, name: str) -> dict:
        if name not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {name!r}")
        return getattr(self, name)

    def counts(self) -> dict[str, int]:
        return {name: len(self.collection(name)) for name in COLLECTIONS}

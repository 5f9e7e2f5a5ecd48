"""Repository package exposing per-collection persistence helpers."""

from __future__ import annotations

from .base import BaseRepository
from .chirp import ChirpRepository
from .token import RefreshTokenRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "ChirpRepository",
    "RefreshTokenRepository",
    "UserRepository",
]

"""Marshmallow schemas: persisted document shape and HTTP payloads."""

from __future__ import annotations

from .auth import LoginResponseSchema, TokenResponseSchema, UserCredentialsSchema
from .chirp import ChirpCreateSchema, ChirpListQuerySchema, ChirpSchema
from .document import (
    ChirpRecordSchema,
    DocumentSchema,
    RefreshTokenRecordSchema,
    UserRecordSchema,
)
from .user import UserSchema
from .webhook import WebhookSchema

__all__ = [
    "ChirpCreateSchema",
    "ChirpListQuerySchema",
    "ChirpRecordSchema",
    "ChirpSchema",
    "DocumentSchema",
    "LoginResponseSchema",
    "RefreshTokenRecordSchema",
    "TokenResponseSchema",
    "UserCredentialsSchema",
    "UserRecordSchema",
    "UserSchema",
    "WebhookSchema",
]

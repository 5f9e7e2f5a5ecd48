"""Schemas for the on-disk JSON document.

The persisted shape uses camelCase keys and string object keys::

    {
      "chirps": {"<id>": {"id": 1, "body": "...", "userId": 3}},
      "users":  {"<id>": {"id": 3, "email": "...", "password": "...", "isChirpyRed": false}},
      "tokens": {"<userId>": {"userId": 3, "token": "<hex>", "expiresAt": "<RFC 3339>"}}
    }

Loading yields a :class:`chirpy.models.Document` with integer keys and
record dataclasses; dumping accepts the same object back.
"""

from __future__ import annotations

from datetime import timezone
from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, pre_dump

from chirpy.models import Chirp, Document, RefreshToken, User


class ChirpRecordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(required=True, strict=True)
    body = fields.String(required=True)
    user_id = fields.Integer(required=True, strict=True, data_key="userId")

    @post_load
    def make_chirp(self, data: dict[str, Any], **_: Any) -> Chirp:
        return Chirp(**data)


class UserRecordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(required=True, strict=True)
    email = fields.String(required=True)
    password_hash = fields.String(required=True, data_key="password")
    is_chirpy_red = fields.Boolean(load_default=False, data_key="isChirpyRed")

    @post_load
    def make_user(self, data: dict[str, Any], **_: Any) -> User:
        return User(**data)


class RefreshTokenRecordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Integer(required=True, strict=True, data_key="userId")
    token = fields.String(required=True)
    expires_at = fields.AwareDateTime(
        required=True, format="iso", default_timezone=timezone.utc, data_key="expiresAt"
    )

    @post_load
    def make_token(self, data: dict[str, Any], **_: Any) -> RefreshToken:
        return RefreshToken(**data)


class DocumentSchema(Schema):
    """Whole-document (de)serialisation with int <-> string key conversion."""

    class Meta:
        unknown = EXCLUDE

    chirps = fields.Dict(
        keys=fields.String(), values=fields.Nested(ChirpRecordSchema), load_default=dict
    )
    users = fields.Dict(
        keys=fields.String(), values=fields.Nested(UserRecordSchema), load_default=dict
    )
    tokens = fields.Dict(
        keys=fields.String(), values=fields.Nested(RefreshTokenRecordSchema), load_default=dict
    )

    @pre_dump
    def stringify_keys(self, document: Document, **_: Any) -> dict[str, Any]:
        return {
            "chirps": {str(k): v for k, v in document.chirps.items()},
            "users": {str(k): v for k, v in document.users.items()},
            "tokens": {str(k): v for k, v in document.tokens.items()},
        }

    @post_load
    def make_document(self, data: dict[str, Any], **_: Any) -> Document:
        # Non-numeric keys raise ValueError; the store reports it as corruption.
        return Document(
            chirps={int(k): v for k, v in data["chirps"].items()},
            users={int(k): v for k, v in data["users"].items()},
            tokens={int(k): v for k, v in data["tokens"].items()},
        )

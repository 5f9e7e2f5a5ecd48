"""User response schema (never exposes the password digest)."""

from __future__ import annotations

from marshmallow import Schema, fields


class UserSchema(Schema):
    id = fields.Integer(dump_only=True)
    email = fields.String(dump_only=True)
    is_chirpy_red = fields.Boolean(dump_only=True)

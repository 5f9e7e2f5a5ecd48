"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class UserCredentialsSchema(Schema):
    """Input payload for registration, login, and account updates."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class TokenResponseSchema(Schema):
    """Response payload containing a fresh access token."""

    token = fields.String(required=True)


class LoginResponseSchema(Schema):
    """Response payload for a successful login: the user plus both tokens."""

    id = fields.Integer(required=True)
    email = fields.String(required=True)
    is_chirpy_red = fields.Boolean(required=True)
    token = fields.String(required=True)
    refresh_token = fields.String(required=True)

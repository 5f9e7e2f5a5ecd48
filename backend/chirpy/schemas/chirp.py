"""Chirp payload schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class ChirpCreateSchema(Schema):
    """Input payload for posting a chirp.

    Length is enforced by the service so the rule lives in one place.
    """

    body = fields.String(required=True)


class ChirpListQuerySchema(Schema):
    """Query string for listing chirps: optional author filter and id order."""

    class Meta:
        unknown = EXCLUDE

    author_id = fields.Integer(load_default=None)
    sort = fields.String(load_default="asc", validate=validate.OneOf(["asc", "desc"]))


class ChirpSchema(Schema):
    id = fields.Integer(dump_only=True)
    body = fields.String(dump_only=True)
    author_id = fields.Integer(attribute="user_id", dump_only=True)

"""Payment-provider webhook envelope."""

from __future__ import annotations

from marshmallow import INCLUDE, Schema, fields


class WebhookDataSchema(Schema):
    class Meta:
        unknown = INCLUDE

    user_id = fields.Integer(load_default=None)


class WebhookSchema(Schema):
    """``{"event": "user.upgraded", "data": {"user_id": 3}}``."""

    event = fields.String(required=True)
    data = fields.Nested(WebhookDataSchema, load_default=dict)

"""Payment-provider webhook endpoint."""

from __future__ import annotations

from flask import Blueprint, request

from chirpy.api.deps import authorization_value, no_content, timing, webhook_service
from chirpy.schemas import WebhookSchema

bp = Blueprint("webhooks", __name__)

webhook_schema = WebhookSchema()


@bp.post("/webhooks")
@timing
def polka_webhook():
    """Apply a provider event. Unknown events are acknowledged with 204."""

    service = webhook_service()
    service.authenticate(authorization_value("ApiKey"))
    payload = webhook_schema.load(request.get_json(silent=True) or {})
    service.handle(payload["event"], payload["data"].get("user_id"))
    return no_content()

from .service import WebhookEvent, WebhookService

__all__ = ["WebhookEvent", "WebhookService"]

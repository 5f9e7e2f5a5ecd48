"""Payment-provider webhook handling."""

from __future__ import annotations

import hmac
import logging
from enum import Enum

from chirpy.models import User
from chirpy.repositories.user import UserRepository
from chirpy.services._shared.base import BaseService
from chirpy.services._shared.errors import UnauthorizedError, ValidationFailure

log = logging.getLogger(__name__)


class WebhookEvent(Enum):
    """Closed set of provider events; anything else parses as ``IGNORED``."""

    USER_UPGRADED = "user.upgraded"
    USER_DOWNGRADED = "user.downgraded"
    IGNORED = "ignored"

    @classmethod
    def parse(cls, name: str) -> WebhookEvent:
        try:
            event = cls(name)
        except ValueError:
            return cls.IGNORED
        # "ignored" is not a real provider event name.
        return cls.IGNORED if event is cls.IGNORED else event


class WebhookService(BaseService):
    """Apply provider events to user records.

    ``user.upgraded`` sets the premium flag, ``user.downgraded`` clears it,
    every other event is acknowledged and ignored.
    """

    def __init__(self, *, users: UserRepository, api_key: str) -> None:
        super().__init__()
        self.users = users
        self.api_key = api_key

    def authenticate(self, presented: str | None) -> None:
        """Compare the ``ApiKey`` credential in constant time.

        :raises UnauthorizedError: If no key is configured or it does not match.
        """
        if not self.api_key or not presented:
            raise UnauthorizedError("Missing API key.")
        if not hmac.compare_digest(presented.encode(), self.api_key.encode()):
            raise UnauthorizedError("Invalid API key.")

    def handle(self, event_name: str, user_id: int | None) -> User | None:
        """Dispatch one event.

        :returns: The updated user, or ``None`` for ignored events.
        :raises ValidationFailure: If a user event lacks ``user_id``.
        :raises NotFoundError: If the user does not exist.
        """
        event = WebhookEvent.parse(event_name)
        if event is WebhookEvent.IGNORED:
            log.info("webhook.ignored", extra={"event": event_name})
            return None
        if user_id is None:
            raise ValidationFailure("Webhook data must include user_id.")
        user = self.users.set_chirpy_red(user_id, event is WebhookEvent.USER_UPGRADED)
        log.info("webhook.applied", extra={"event": event.value, "record_id": user_id})
        return user

# chirpy/services/_shared/base.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from chirpy.core import errors as api_errors
from chirpy.services._shared.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceError,
    StorageError,
    UnauthorizedError,
    ValidationFailure,
)

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Centralize error translation to API errors.
    * Offer the shared ownership check and a patchable clock.
    * Keep services thin, orchestration-only, no web leakage.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        ``Unauthorized`` -> 401, ``NotFound`` -> 404, ``Forbidden`` -> 403,
        ``Conflict`` and validation failures -> 400, storage failures -> 500.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, UnauthorizedError):
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, ForbiddenError):
            return api_errors.Forbidden(str(exc))

        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))

        if isinstance(exc, StorageError):
            # Details stay in the logs; clients get a generic message.
            log.error("Storage failure: %s", exc, exc_info=exc)
            return api_errors.InternalError()

        if isinstance(exc, ValidationFailure | ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor is the resource owner.

        :raises ForbiddenError: If actor is not the owner.
        """
        if actor_id is None or int(actor_id) != int(owner_id):
            raise ForbiddenError(msg or "You can only modify your own resources.")

"""HTTP error types and the handlers rendering them as problem+json.

Every error leaving the API is an RFC 7807 document::

    {"type": "about:blank", "title": "Not Found", "status": 404,
     "detail": "Chirp not found: 3", "error": "Chirp not found: 3",
     "code": "not_found", "instance": "/api/chirps/3", "request_id": "..."}

``error`` repeats ``detail`` for clients that only read a flat message.
Service-layer exceptions are mapped by ``BaseService.translate_exceptions``.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from werkzeug.exceptions import HTTPException

from chirpy.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Stable machine-readable codes for statuses raised outside APIError.
STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    415: "unsupported_media_type",
    500: "internal_server_error",
}


def problem(
    status: int, code: str, message: str, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Build the problem document for the current request."""
    status = int(status)
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "error": message,
        "code": code,
        "instance": request.path,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def _respond(body: dict[str, Any]) -> tuple[Response, int]:
    resp = jsonify(body)
    resp.mimetype = PROBLEM_MIMETYPE
    return resp, body["status"]


class APIError(Exception):
    """
    An error that maps directly onto an HTTP response.

    :param message: Client-safe description (``detail`` and ``error``).
    :param status_code: HTTP status, ``400`` by default.
    :param code: Machine-readable snake_case identifier.
    :param details: Optional structured, client-safe payload.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code or type(self).status_code)
        self.code = code or type(self).code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return problem(self.status_code, self.code, self.message, self.details or None)


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class Conflict(APIError):
    """Uniqueness collision (duplicate email). Reported as a 400."""

    code = "conflict"

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message)


class Unauthorized(APIError):
    status_code = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class Forbidden(APIError):
    status_code = HTTPStatus.FORBIDDEN
    code = "forbidden"

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class InternalError(APIError):
    """Storage or other server-side failure; never carries internals."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "internal_server_error"

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message)


def init_app(app: Flask) -> None:
    """
    Register the JSON error handlers on ``app``.

    4xx responses are logged as warnings, 5xx as errors with traceback.
    """

    from chirpy.services._shared.base import BaseService
    from chirpy.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def on_api_error(err: APIError):
        body = err.to_problem()
        if err.status_code >= 500:
            log.error("api_error code=%s status=%s", err.code, err.status_code, exc_info=err)
        else:
            log.warning(
                "api_error code=%s status=%s msg=%s", err.code, err.status_code, err.message
            )
        return _respond(body)

    @app.errorhandler(ServiceError)
    def on_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if isinstance(translated, APIError):
            return on_api_error(translated)
        return on_unexpected(err)

    @app.errorhandler(HTTPException)
    def on_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = STATUS_CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        log.warning("http_error code=%s status=%s", code, status)
        return _respond(problem(status, code, message))

    @app.errorhandler(MarshmallowValidationError)
    def on_validation_error(err: MarshmallowValidationError):
        log.warning("validation_error fields=%s", sorted(err.normalized_messages()))
        return _respond(
            problem(
                HTTPStatus.BAD_REQUEST,
                "validation_error",
                "Validation failed",
                {"errors": err.messages},
            )
        )

    @app.errorhandler(Exception)
    def on_unexpected(err: Exception):
        log.error("unhandled_exception", exc_info=err)
        return _respond(
            problem(HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error")
        )


__all__ = [
    "APIError",
    "Conflict",
    "Forbidden",
    "InternalError",
    "NotFound",
    "Unauthorized",
    "init_app",
    "problem",
]

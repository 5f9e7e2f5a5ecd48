"""Shared API helpers: bearer extraction, auth guard, service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from chirpy.core.errors import Unauthorized
from chirpy.core.extensions import get_store
from chirpy.core.security import PasswordHasher
from chirpy.infra.jwt import FlaskJWTTokenProvider
from chirpy.repositories import ChirpRepository, RefreshTokenRepository, UserRepository
from chirpy.services._shared.base import ServiceContext
from chirpy.services.auth import AuthService, AuthTokenConfig
from chirpy.services.chirps import ChirpService
from chirpy.services.users import UserService
from chirpy.services.webhooks import WebhookService

F = TypeVar("F", bound=Callable[..., Any])


# ------------------------------- Headers ----------------------------------


def authorization_value(scheme: str) -> str:
    """Return the credential following ``<scheme> `` in the Authorization header.

    :raises Unauthorized: If the header is missing or uses another scheme.
    """
    header = request.headers.get("Authorization", "")
    prefix = f"{scheme} "
    if not header.startswith(prefix) or not header[len(prefix) :].strip():
        raise Unauthorized("No authorization header")
    return header[len(prefix) :].strip()


def bearer_token() -> str:
    return authorization_value("Bearer")


# ------------------------------- Services ---------------------------------


def _hasher() -> PasswordHasher:
    return PasswordHasher(method=current_app.config["PASSWORD_HASH_METHOD"])


def auth_service() -> AuthService:
    store = get_store()
    return AuthService(
        token_provider=FlaskJWTTokenProvider(),
        refresh_store=RefreshTokenRepository(store),
        users=UserRepository(store),
        hasher=_hasher(),
        token_cfg=AuthTokenConfig(
            access_expires=current_app.config["JWT_ACCESS_TOKEN_EXPIRES"],
            refresh_expires=current_app.config["REFRESH_TOKEN_EXPIRES"],
        ),
    )


def user_service() -> UserService:
    return UserService(users=UserRepository(get_store()), hasher=_hasher(), ctx=_ctx())


def chirp_service() -> ChirpService:
    return ChirpService(chirps=ChirpRepository(get_store()), ctx=_ctx())


def webhook_service() -> WebhookService:
    return WebhookService(
        users=UserRepository(get_store()), api_key=current_app.config.get("POLKA_API_KEY", "")
    )


def _ctx() -> ServiceContext:
    return ServiceContext(actor_id=g.get("user_id"), request_id=g.get("request_id"))


# ------------------------------- Decorators -------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token; sets ``g.user_id``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.user_id = auth_service().verify_access(bearer_token())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def no_content() -> Response:
    return Response(status=204)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]

# chirpy/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from chirpy.services._shared.errors import UnauthorizedError
from chirpy.services._shared.ports import TokenProvider

ACCESS_TOKEN_TYPE = "access"


@dataclass(slots=True)
class FlaskJWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Tokens are HS256-signed with ``JWT_SECRET_KEY`` and carry ``iss`` (from
    ``JWT_ENCODE_ISSUER``), ``iat``, ``exp`` and ``sub`` claims.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def create_access_token(self, *, identity: str, expires_delta: timedelta) -> str:
        return cast(str, create_access_token(identity=identity, expires_delta=expires_delta))

    def decode(self, token: str) -> dict[str, Any]:
        """Verify and decode ``token``.

        Signature, issuer and ``exp`` are checked by the library; any failure,
        including a refresh-type or malformed token, is reported the same way.
        """
        try:
            claims = cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException, ValueError, TypeError) as exc:
            raise UnauthorizedError("Invalid or expired token.") from exc
        if claims.get("type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
            raise UnauthorizedError("Wrong token type: access token required.")
        return claims

"""Login and session endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from chirpy.api.deps import auth_service, bearer_token, json_response, no_content, timing
from chirpy.schemas import LoginResponseSchema, TokenResponseSchema, UserCredentialsSchema
from chirpy.services.auth import LoginIn

bp = Blueprint("auth", __name__)

credentials_schema = UserCredentialsSchema()
login_schema = LoginResponseSchema()
token_schema = TokenResponseSchema()


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access and a refresh token."""

    data = credentials_schema.load(request.get_json(silent=True) or {})
    result = auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    body = login_schema.dump(
        {
            "id": result.user.id,
            "email": result.user.email,
            "is_chirpy_red": result.user.is_chirpy_red,
            "token": result.access_token,
            "refresh_token": result.refresh_token,
        }
    )
    return json_response(body)


@bp.post("/refresh")
@timing
def refresh():
    """Exchange the bearer refresh token for a new access token."""

    token = auth_service().refresh(bearer_token())
    return json_response(token_schema.dump({"token": token}))


@bp.post("/revoke")
@timing
def revoke():
    """Delete the bearer refresh token."""

    auth_service().revoke(bearer_token())
    return no_content()

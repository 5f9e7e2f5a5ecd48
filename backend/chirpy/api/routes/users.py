"""User endpoints."""

from __future__ import annotations

from flask import Blueprint, g, request

from chirpy.api.deps import json_response, require_auth, timing, user_service
from chirpy.schemas import UserCredentialsSchema, UserSchema

bp = Blueprint("users", __name__)

credentials_schema = UserCredentialsSchema()
user_schema = UserSchema()


@bp.post("")
@timing
def create_user():
    """Register a new account."""

    data = credentials_schema.load(request.get_json(silent=True) or {})
    user = user_service().register(data["email"], data["password"])
    return json_response(user_schema.dump(user), status=201)


@bp.put("")
@require_auth
@timing
def update_user():
    """Replace the authenticated user's email and password."""

    data = credentials_schema.load(request.get_json(silent=True) or {})
    user = user_service().update_credentials(
        g.user_id, email=data["email"], password=data["password"]
    )
    return json_response(user_schema.dump(user))

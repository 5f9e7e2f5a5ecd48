"""Chirp endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from chirpy.api.deps import chirp_service, json_response, no_content, require_auth, timing
from chirpy.core.errors import APIError
from chirpy.schemas import ChirpCreateSchema, ChirpListQuerySchema, ChirpSchema

bp = Blueprint("chirps", __name__)

create_schema = ChirpCreateSchema()
list_query_schema = ChirpListQuerySchema()
chirp_schema = ChirpSchema()
chirp_list_schema = ChirpSchema(many=True)


def _chirp_id(raw: str) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise APIError("invalid integer for chirp id", status_code=400)
    return int(raw)


@bp.get("")
@timing
def list_chirps():
    """Return chirps sorted by id (``?sort=asc|desc``), optionally by author."""

    query = list_query_schema.load(request.args)
    items = chirp_service().list(author_id=query["author_id"], sort=query["sort"])
    return json_response(chirp_list_schema.dump(items))


@bp.get("/<chirp_id>")
@timing
def get_chirp(chirp_id: str):
    return json_response(chirp_schema.dump(chirp_service().get(_chirp_id(chirp_id))))


@bp.post("")
@require_auth
@timing
def create_chirp():
    """Post a chirp as the authenticated user."""

    data = create_schema.load(request.get_json(silent=True) or {})
    chirp = chirp_service().create(data["body"])
    return json_response(chirp_schema.dump(chirp), status=201)


@bp.delete("/<chirp_id>")
@require_auth
@timing
def delete_chirp(chirp_id: str):
    """Delete one of the authenticated user's chirps."""

    chirp_service().delete(_chirp_id(chirp_id))
    return no_content()

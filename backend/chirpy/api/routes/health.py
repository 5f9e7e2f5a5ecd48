"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from chirpy.api.deps import json_response, timing
from chirpy.core.extensions import get_store
from chirpy.services._shared.errors import StorageError

bp = Blueprint("health", __name__)


@bp.get("/healthz")
@timing
def healthcheck():
    """Return application and document store health information."""

    status, counts = "OK", None
    try:
        counts = get_store().stats()
    except StorageError:
        current_app.logger.exception("healthcheck.store_error")
        status = "FAIL"
    return json_response({"status": status, "store": counts}, status=200 if counts else 503)

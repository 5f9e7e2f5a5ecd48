"""WSGI entry point (``gunicorn -c gunicorn.conf.py``)."""

from __future__ import annotations

from chirpy import create_app

app = create_app()

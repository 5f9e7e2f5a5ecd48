"""Command-line interface registration for the Flask application."""

from __future__ import annotations

from flask import Flask

from .db import db_cli


def init_app(app: Flask) -> None:
    """Register the ``flask db`` command group on ``app``."""
    app.cli.add_command(db_cli)

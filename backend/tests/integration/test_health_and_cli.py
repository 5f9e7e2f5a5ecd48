"""Integration tests for health checks, error rendering and CLI commands."""

from __future__ import annotations

from tests.factories.chirp import ChirpFactory


def test_healthz(client, store) -> None:
    ChirpFactory()

    resp = client.get("/api/healthz")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "OK", "store": {"chirps": 1, "users": 1, "tokens": 0}}


def test_unknown_route_is_problem_json(client) -> None:
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    body = resp.get_json()
    assert body["status"] == 404
    assert body["request_id"]


def test_method_not_allowed(client) -> None:
    assert client.get("/api/users").status_code == 405


def test_db_stats_command(app, store) -> None:
    ChirpFactory()

    result = app.test_cli_runner().invoke(args=["db", "stats"])

    assert result.exit_code == 0
    assert "chirps" in result.output
    assert "records=   1" in result.output


def test_db_reset_command(app, store) -> None:
    ChirpFactory()

    result = app.test_cli_runner().invoke(args=["db", "reset", "--yes"])

    assert result.exit_code == 0, result.output
    assert store.stats() == {"chirps": 0, "users": 0, "tokens": 0}
    assert store.ids.current("chirps") == 0

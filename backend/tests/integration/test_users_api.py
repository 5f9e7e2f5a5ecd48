"""Integration tests for the user endpoints."""

from __future__ import annotations


def test_register_returns_public_fields(client) -> None:
    resp = client.post("/api/users", json={"email": "Walt@Example.com", "password": "04234"})

    assert resp.status_code == 201
    assert resp.get_json() == {"id": 1, "email": "walt@example.com", "is_chirpy_red": False}


def test_register_duplicate_email_is_a_bad_request(client) -> None:
    payload = {"email": "dup@example.com", "password": "pw"}
    assert client.post("/api/users", json=payload).status_code == 201

    resp = client.post("/api/users", json=payload)

    assert resp.status_code == 400
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "conflict"


def test_register_validates_payload(client) -> None:
    resp = client.post("/api/users", json={"email": "not-an-email"})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["code"] == "validation_error"
    assert set(body["details"]["errors"]) == {"email", "password"}


def test_register_with_non_json_body(client) -> None:
    resp = client.post("/api/users", data="garbage", content_type="text/plain")

    assert resp.status_code == 400


def test_update_requires_authentication(client) -> None:
    resp = client.put("/api/users", json={"email": "a@b.io", "password": "x"})

    assert resp.status_code == 401
    assert resp.get_json()["error"] == "No authorization header"


def test_update_credentials(client, user, auth_header, login) -> None:
    resp = client.put(
        "/api/users",
        json={"email": "renamed@example.com", "password": "n3w-pass"},
        headers=auth_header,
    )

    assert resp.status_code == 200
    assert resp.get_json() == {"id": user.id, "email": "renamed@example.com", "is_chirpy_red": False}
    assert login("renamed@example.com", "n3w-pass")["id"] == user.id
    old = client.post("/api/login", json={"email": user.email, "password": "n3w-pass"})
    assert old.status_code == 401


def test_update_to_taken_email(client, auth_header) -> None:
    client.post("/api/users", json={"email": "taken@example.com", "password": "pw"})

    resp = client.put(
        "/api/users", json={"email": "taken@example.com", "password": "pw"}, headers=auth_header
    )

    assert resp.status_code == 400

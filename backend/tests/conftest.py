"""Pytest fixtures: an application bound to a per-test JSON document.

Every test gets its own ``tmp_path`` document, so state never leaks
between cases and tests can run in any order.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient

from chirpy import create_app
from chirpy.core.config import TestingConfig
from chirpy.core.extensions import get_store
from chirpy.core.security import PasswordHasher
from chirpy.infra.document import JSONDocumentStore
from chirpy.models import User
from tests.factories import DocumentStoreHolder
from tests.factories.user import DEFAULT_PASSWORD, UserFactory

POLKA_KEY = TestingConfig.POLKA_API_KEY


@pytest.fixture()
def app(tmp_path) -> Flask:
    """Create a Flask application whose store lives under ``tmp_path``.

    Returns
    -------
    Flask
        Configured application. No context is pushed, so each test-client
        request gets a fresh ``g``.
    """

    class TestConfig(TestingConfig):
        DATABASE_PATH = str(tmp_path / "database.json")

    application = create_app(TestConfig, instance_relative_config=False)
    application.logger.setLevel("WARNING")
    return application


@pytest.fixture()
def app_context(app: Flask) -> Generator[None, None, None]:
    """Push an application context (JWT helpers need one)."""

    with app.app_context():
        yield


@pytest.fixture()
def store(app: Flask) -> JSONDocumentStore:
    """Document store bound to the test application."""

    return get_store(app)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture()
def hasher() -> PasswordHasher:
    """Cheap hasher matching ``TestingConfig.PASSWORD_HASH_METHOD``."""

    return PasswordHasher(method=TestingConfig.PASSWORD_HASH_METHOD)


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the per-test document store -------------------------
@pytest.fixture(autouse=True)
def _factories_store(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Wire factories to the test store when the test uses one."""

    if "store" in request.fixturenames:
        DocumentStoreHolder.set(request.getfixturevalue("store"))
    yield
    DocumentStoreHolder.set(None)


@pytest.fixture()
def user(store: JSONDocumentStore) -> User:
    """Persist and return a user whose password is ``DEFAULT_PASSWORD``."""

    return UserFactory()


@pytest.fixture()
def login(client: FlaskClient) -> Callable[..., dict[str, Any]]:
    """Return a helper logging in through the API and returning the JSON body."""

    def _login(email: str, password: str = DEFAULT_PASSWORD) -> dict[str, Any]:
        resp = client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()

    return _login


@pytest.fixture()
def auth_header(user: User, login) -> dict[str, str]:
    """Authorization header carrying a valid access token for ``user``."""

    return {"Authorization": f"Bearer {login(user.email)['token']}"}


@pytest.fixture()
def polka_header() -> dict[str, str]:
    return {"Authorization": f"ApiKey {POLKA_KEY}"}

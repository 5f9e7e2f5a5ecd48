"""Unit tests for :class:`chirpy.services.users.UserService`."""

from __future__ import annotations

import threading

import pytest

from chirpy.repositories import UserRepository
from chirpy.services._shared.errors import DuplicateEmailError, NotFoundError, ValidationFailure
from chirpy.services.users import UserService
from tests.factories.user import UserFactory


@pytest.fixture()
def service(store, hasher) -> UserService:
    return UserService(users=UserRepository(store), hasher=hasher)


def test_register_hashes_the_password(service, hasher, faker):
    email = faker.email()

    user = service.register(email, "s3cret")

    assert user.email == email.lower()
    assert user.password_hash != "s3cret"
    assert hasher.verify(user.password_hash, "s3cret")


def test_register_duplicate_email(service):
    service.register("same@example.com", "pw")

    with pytest.raises(DuplicateEmailError):
        service.register("Same@Example.com", "pw")


def test_register_empty_password(service):
    with pytest.raises(ValidationFailure):
        service.register("someone@example.com", "")


def test_update_credentials_replaces_email_and_password(service, hasher):
    user = UserFactory()

    updated = service.update_credentials(user.id, email="New@Example.com", password="changed")

    assert updated.id == user.id
    assert service.get(user.id).email == "new@example.com"
    assert hasher.verify(service.get(user.id).password_hash, "changed")


def test_update_credentials_unknown_user(service):
    with pytest.raises(NotFoundError):
        service.update_credentials(1234, email="x@example.com", password="pw")


def test_update_credentials_keeps_a_concurrent_premium_upgrade(service, store):
    user = UserFactory(is_chirpy_red=False)
    users = service.users
    original_check = users._check_update
    upgrade = threading.Thread(target=users.set_chirpy_red, args=(user.id, True))

    def upgrade_between_read_and_write(doc, record):
        upgrade.start()
        upgrade.join(timeout=0.2)
        assert upgrade.is_alive(), "upgrade must wait for the running write"
        original_check(doc, record)

    users._check_update = upgrade_between_read_and_write
    service.update_credentials(user.id, email="new@example.com", password="changed")
    upgrade.join(timeout=5)

    stored = UserRepository(store).get(user.id)
    assert not upgrade.is_alive()
    assert stored.email == "new@example.com"
    assert stored.is_chirpy_red is True

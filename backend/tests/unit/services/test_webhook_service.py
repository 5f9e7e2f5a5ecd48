"""Unit tests for the payment-provider webhook service."""

from __future__ import annotations

import pytest

from chirpy.repositories import UserRepository
from chirpy.services._shared.errors import NotFoundError, UnauthorizedError, ValidationFailure
from chirpy.services.webhooks import WebhookEvent, WebhookService
from tests.factories.user import UserFactory


@pytest.fixture()
def service(store) -> WebhookService:
    return WebhookService(users=UserRepository(store), api_key="k3y")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("user.upgraded", WebhookEvent.USER_UPGRADED),
        ("user.downgraded", WebhookEvent.USER_DOWNGRADED),
        ("user.deleted", WebhookEvent.IGNORED),
        ("ignored", WebhookEvent.IGNORED),
    ],
)
def test_event_parsing(name, expected):
    assert WebhookEvent.parse(name) is expected


def test_authenticate(service):
    service.authenticate("k3y")

    for presented in (None, "", "wrong"):
        with pytest.raises(UnauthorizedError):
            service.authenticate(presented)


def test_missing_configured_key_rejects_everything(store):
    with pytest.raises(UnauthorizedError):
        WebhookService(users=UserRepository(store), api_key="").authenticate("")


def test_upgrade_then_downgrade(service, store):
    user = UserFactory()

    assert service.handle("user.upgraded", user.id).is_chirpy_red is True
    assert service.handle("user.downgraded", user.id).is_chirpy_red is False
    assert UserRepository(store).get(user.id).is_chirpy_red is False


def test_unknown_event_is_ignored_even_without_user(service):
    assert service.handle("payment.failed", None) is None


def test_upgrade_of_unknown_user(service):
    with pytest.raises(NotFoundError):
        service.handle("user.upgraded", 77)


def test_upgrade_requires_user_id(service):
    with pytest.raises(ValidationFailure):
        service.handle("user.upgraded", None)

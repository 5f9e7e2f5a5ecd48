"""Unit tests for :class:`chirpy.services.chirps.ChirpService`."""

from __future__ import annotations

import pytest

from chirpy.repositories import ChirpRepository
from chirpy.services._shared.base import ServiceContext
from chirpy.services._shared.errors import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailure,
)
from chirpy.services.chirps import ChirpService
from tests.factories.chirp import ChirpFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def service_for(store):
    def _build(actor_id: int | None) -> ChirpService:
        return ChirpService(chirps=ChirpRepository(store), ctx=ServiceContext(actor_id=actor_id))

    return _build


def test_create_cleans_body_and_sets_owner(service_for, user):
    chirp = service_for(user.id).create("what a kerfuffle")

    assert chirp.body == "what a ****"
    assert chirp.user_id == user.id


def test_create_requires_an_actor(service_for):
    with pytest.raises(UnauthorizedError):
        service_for(None).create("hello")


def test_create_rejects_long_body_without_consuming_an_id(service_for, user, store):
    with pytest.raises(ValidationFailure):
        service_for(user.id).create("x" * 141)

    assert store.ids.current("chirps") == 0


def test_list_sorting_and_author_filter(service_for):
    alice, bob = UserFactory(), UserFactory()
    c1, c2, c3 = ChirpFactory(user=alice), ChirpFactory(user=bob), ChirpFactory(user=alice)
    service = service_for(None)

    assert [c.id for c in service.list()] == [c1.id, c2.id, c3.id]
    assert [c.id for c in service.list(sort="desc")] == [c3.id, c2.id, c1.id]
    assert [c.id for c in service.list(author_id=alice.id, sort="desc")] == [c3.id, c1.id]
    assert service.list(author_id=999) == []


def test_delete_by_owner(service_for):
    chirp = ChirpFactory()
    service = service_for(chirp.user_id)

    service.delete(chirp.id)

    with pytest.raises(NotFoundError):
        service.get(chirp.id)
    with pytest.raises(NotFoundError):
        service.delete(chirp.id)


def test_delete_by_someone_else_is_forbidden(service_for):
    chirp = ChirpFactory()
    intruder = UserFactory()

    with pytest.raises(ForbiddenError):
        service_for(intruder.id).delete(chirp.id)

    assert service_for(None).get(chirp.id) == chirp

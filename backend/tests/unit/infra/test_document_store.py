"""Unit tests for the JSON document store."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime

import pytest

from chirpy.infra.document import JSONDocumentStore
from chirpy.models import Chirp, Document, RefreshToken, User
from chirpy.repositories import ChirpRepository
from chirpy.services._shared.errors import StorageError


@pytest.fixture()
def path(tmp_path):
    return tmp_path / "data" / "database.json"


def test_creates_empty_document_and_parent_dir(path):
    store = JSONDocumentStore(path)

    assert path.exists()
    assert json.loads(path.read_text()) == {"chirps": {}, "users": {}, "tokens": {}}
    assert store.stats() == {"chirps": 0, "users": 0, "tokens": 0}


def test_reopening_keeps_records_and_counters(path):
    store = JSONDocumentStore(path)
    with store.mutate() as doc:
        doc.chirps[store.next_id("chirps")] = Chirp(id=1, body="hi", user_id=1)
        doc.chirps[store.next_id("chirps")] = Chirp(id=2, body="yo", user_id=1)

    reopened = JSONDocumentStore(path)

    assert sorted(reopened.load().chirps) == [1, 2]
    assert reopened.next_id("chirps") == 3


def test_reset_flag_discards_existing_document(path):
    store = JSONDocumentStore(path)
    with store.mutate() as doc:
        doc.chirps[store.next_id("chirps")] = Chirp(id=1, body="hi", user_id=1)

    fresh = JSONDocumentStore(path, reset=True)

    assert fresh.stats()["chirps"] == 0
    assert fresh.next_id("chirps") == 1


def test_persisted_shape_uses_camel_case_and_string_keys(path):
    store = JSONDocumentStore(path)
    expires = datetime(2030, 1, 2, 3, 4, 5, tzinfo=UTC)
    store.persist(
        Document(
            chirps={4: Chirp(id=4, body="hello", user_id=7)},
            users={7: User(id=7, email="a@b.io", password_hash="digest", is_chirpy_red=True)},
            tokens={7: RefreshToken(user_id=7, token="ab" * 32, expires_at=expires)},
        )
    )

    raw = json.loads(path.read_text())

    assert raw["chirps"] == {"4": {"id": 4, "body": "hello", "userId": 7}}
    assert raw["users"]["7"] == {
        "id": 7,
        "email": "a@b.io",
        "password": "digest",
        "isChirpyRed": True,
    }
    assert raw["tokens"]["7"]["userId"] == 7
    assert datetime.fromisoformat(raw["tokens"]["7"]["expiresAt"]) == expires


def test_load_round_trips_records(path):
    store = JSONDocumentStore(path)
    expires = datetime(2030, 1, 1, tzinfo=UTC)
    document = Document(
        users={1: User(id=1, email="x@y.io", password_hash="d")},
        tokens={1: RefreshToken(user_id=1, token="f" * 64, expires_at=expires)},
    )
    store.persist(document)

    loaded = store.load()

    assert loaded.users[1] == document.users[1]
    assert loaded.tokens[1].expires_at == expires
    assert loaded.tokens[1].expires_at.tzinfo is not None


def test_corrupt_document_raises_storage_error(path):
    store = JSONDocumentStore(path)
    path.write_text("{not json")

    with pytest.raises(StorageError):
        store.load()


def test_non_numeric_key_is_reported_as_corruption(path):
    store = JSONDocumentStore(path)
    path.write_text(json.dumps({"chirps": {"abc": {"id": 1, "body": "x", "userId": 1}}}))

    with pytest.raises(StorageError):
        store.load()


def test_unreadable_document_at_startup_is_fatal(path):
    path.parent.mkdir(parents=True)
    path.write_text("[]")

    with pytest.raises(StorageError):
        JSONDocumentStore(path)


def test_mutate_does_not_persist_when_block_raises(path):
    store = JSONDocumentStore(path)

    with pytest.raises(RuntimeError):
        with store.mutate() as doc:
            doc.chirps[1] = Chirp(id=1, body="lost", user_id=1)
            raise RuntimeError("boom")

    assert store.stats()["chirps"] == 0


def test_persist_leaves_no_temp_files(path):
    store = JSONDocumentStore(path)
    for _ in range(3):
        with store.mutate():
            pass

    assert [p.name for p in path.parent.iterdir()] == [path.name]


def test_reset_rewinds_counters(path):
    store = JSONDocumentStore(path)
    store.next_id("users")
    store.next_id("users")

    store.reset()

    assert store.ids.current("users") == 0
    assert store.stats() == {"chirps": 0, "users": 0, "tokens": 0}


def test_concurrent_creates_keep_every_record(path):
    """Overlapping writers never overwrite each other's records."""
    store = JSONDocumentStore(path)
    chirps = ChirpRepository(store)
    total = 40

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda i: chirps.create(body=f"c{i}", user_id=1), range(total)))

    ids = [c.id for c in created]
    assert len(set(ids)) == total
    assert sorted(store.load().chirps) == sorted(ids)
    assert [c.id for c in chirps.list()] == sorted(ids)

"""Chirp repository."""

from __future__ import annotations

import logging

from chirpy.models import Chirp
from chirpy.repositories.base import BaseRepository

log = logging.getLogger(__name__)


class ChirpRepository(BaseRepository[Chirp]):
    """Persistence-only repository for :class:`Chirp`."""

    collection = "chirps"
    entity = "Chirp"

    def _filterable_fields(self) -> set[str]:
        return {"user_id"}

    def create(self, *, body: str, user_id: int) -> Chirp:
        """Allocate an id and persist a chirp whose body is already cleaned."""
        with self.store.mutate() as doc:
            chirp = Chirp(id=self.store.next_id(self.collection), body=body, user_id=user_id)
            doc.chirps[chirp.id] = chirp
        log.debug("chirp.created", extra={"collection": self.collection, "record_id": chirp.id})
        return chirp

    def list_by_author(self, user_id: int) -> list[Chirp]:
        return self.list({"user_id": user_id})

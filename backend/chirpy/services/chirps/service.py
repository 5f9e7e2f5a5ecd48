"""Chirp posting, listing and deletion."""

from __future__ import annotations

import logging
from typing import Literal

from chirpy.models import Chirp, clean_chirp_body
from chirpy.repositories.chirp import ChirpRepository
from chirpy.services._shared.base import BaseService, ServiceContext
from chirpy.services._shared.errors import NotFoundError, UnauthorizedError

log = logging.getLogger(__name__)

SortOrder = Literal["asc", "desc"]


class ChirpService(BaseService):
    """Use cases over the ``chirps`` collection.

    Mutations require ``ctx.actor_id`` (the authenticated user).
    """

    def __init__(self, *, chirps: ChirpRepository, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.chirps = chirps

    def _actor(self) -> int:
        if self.ctx.actor_id is None:
            raise UnauthorizedError()
        return self.ctx.actor_id

    def create(self, body: str) -> Chirp:
        """Clean ``body`` and store it as a chirp of the current actor.

        :raises ValidationFailure: If the body is longer than 140 characters.
        """
        cleaned = clean_chirp_body(body)
        return self.chirps.create(body=cleaned, user_id=self._actor())

    def list(self, *, author_id: int | None = None, sort: SortOrder = "asc") -> list[Chirp]:
        """Return chirps ordered by id, optionally restricted to one author."""
        items = (
            self.chirps.list_by_author(author_id) if author_id is not None else self.chirps.list()
        )
        return sorted(items, key=lambda c: c.id, reverse=sort == "desc")

    def get(self, chirp_id: int) -> Chirp:
        return self.chirps.get_or_raise(chirp_id)

    def delete(self, chirp_id: int) -> None:
        """Delete a chirp owned by the current actor.

        :raises NotFoundError: If the chirp does not exist (or is already gone).
        :raises ForbiddenError: If the actor does not own it.
        """
        chirp = self.chirps.get_or_raise(chirp_id)
        self.ensure_owner(self._actor(), chirp.user_id, msg="You can only delete your own chirps.")
        if not self.chirps.delete(chirp_id):
            raise NotFoundError("Chirp", chirp_id)
        log.info("chirp.deleted", extra={"record_id": chirp_id})

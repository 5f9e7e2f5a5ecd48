"""User repository for persistence and lookup by email."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from chirpy.models import Document, User, normalize_email
from chirpy.repositories.base import BaseRepository
from chirpy.services._shared.errors import DuplicateEmailError

log = logging.getLogger(__name__)


def _find_by_email(doc: Document, email: str) -> User | None:
    return next((u for u in doc.users.values() if u.email == email), None)


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Emails are normalized on every write and lookup. Users are never deleted.
    It NEVER hashes passwords or issues tokens; callers pass a ready digest.
    """

    collection = "users"
    entity = "User"

    def _filterable_fields(self) -> set[str]:
        return {"email", "is_chirpy_red"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        return _find_by_email(self.store.load(), normalize_email(email))

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    # -------------------------------- Writes --------------------------------

    def create(self, *, email: str, password_hash: str, is_chirpy_red: bool = False) -> User:
        """Persist a new user.

        The uniqueness scan runs before an id is allocated, inside the same
        mutation block as the write, so a rejected create never consumes an id.

        :raises DuplicateEmailError: If the normalized email is already taken.
        """
        normalized = normalize_email(email)
        with self.store.mutate() as doc:
            if _find_by_email(doc, normalized) is not None:
                log.info("user.duplicate_email", extra={"collection": self.collection})
                raise DuplicateEmailError(normalized)
            user = User(
                id=self.store.next_id(self.collection),
                email=normalized,
                password_hash=password_hash,
                is_chirpy_red=is_chirpy_red,
            )
            doc.users[user.id] = user
        return user

    def update(self, record: User) -> User:
        """Replace a user, normalizing its email first.

        :raises NotFoundError: If the user does not exist.
        :raises DuplicateEmailError: If another user already has the email.
        """
        return super().update(replace(record, email=normalize_email(record.email)))

    def modify(self, key: int, change: Callable[[User], User]) -> User:
        """Apply ``change`` to the stored user, normalizing the resulting email."""

        def normalized(user: User) -> User:
            new = change(user)
            return replace(new, email=normalize_email(new.email))

        return super().modify(key, normalized)

    def _check_update(self, doc: Document, record: User) -> None:
        owner = _find_by_email(doc, record.email)
        if owner is not None and owner.id != record.id:
            raise DuplicateEmailError(record.email)

    def set_credentials(self, user_id: int, *, email: str, password_hash: str) -> User:
        """Replace email and digest, keeping every other field as stored.

        :raises NotFoundError: If the user does not exist.
        :raises DuplicateEmailError: If another user already has the email.
        """
        return self.modify(
            user_id, lambda user: replace(user, email=email, password_hash=password_hash)
        )

    def set_chirpy_red(self, user_id: int, value: bool) -> User:
        """Flip the premium flag on an existing user."""
        return self.modify(user_id, lambda user: replace(user, is_chirpy_red=value))

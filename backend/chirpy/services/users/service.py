"""Account registration and profile updates."""

from __future__ import annotations

import logging

from chirpy.core.security import PasswordHasher
from chirpy.models import User
from chirpy.repositories.user import UserRepository
from chirpy.services._shared.base import BaseService, ServiceContext

log = logging.getLogger(__name__)


class UserService(BaseService):
    """Coordinate user registration and self-service updates."""

    def __init__(
        self,
        *,
        users: UserRepository,
        hasher: PasswordHasher | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.users = users
        self.hasher = hasher or PasswordHasher()

    def register(self, email: str, password: str) -> User:
        """Register a new user.

        :raises DuplicateEmailError: If the normalized email is taken.
        :raises ValidationFailure: If email or password are unusable.
        """
        user = self.users.create(email=email, password_hash=self.hasher.hash(password))
        log.info("user.registered", extra={"record_id": user.id})
        return user

    def get(self, user_id: int) -> User:
        return self.users.get_or_raise(user_id)

    def update_credentials(self, user_id: int, *, email: str, password: str) -> User:
        """Replace email and password of ``user_id``.

        The password is always re-hashed, so the record is always rewritten.
        Hashing happens before the write; other fields (the premium flag) are
        taken from the stored record at write time.

        :raises NotFoundError: If the user no longer exists.
        :raises DuplicateEmailError: If another user owns ``email``.
        """
        digest = self.hasher.hash(password)
        return self.users.set_credentials(user_id, email=email, password_hash=digest)

# chirpy/services/auth/service.py
from __future__ import annotations

import logging
import secrets

from chirpy.core.security import PasswordHasher
from chirpy.repositories.user import UserRepository
from chirpy.services._shared.base import BaseService
from chirpy.services._shared.errors import NotFoundError, UnauthorizedError
from chirpy.services._shared.ports import RefreshTokenStore, TokenProvider
from chirpy.services.auth.dto import AuthTokenConfig, LoginIn, LoginOut

log = logging.getLogger(__name__)

REFRESH_TOKEN_BYTES = 32


class AuthService(BaseService):
    """
    Session lifecycle service: login, access verification, refresh, revoke.

    Two credential kinds are handled:

    * **access tokens**: stateless, signed through the :class:`TokenProvider`,
      short TTL, verifiable without storage;
    * **refresh tokens**: opaque random hex strings stored through the
      :class:`RefreshTokenStore`, one per user, long TTL.

    Refreshing mints a new access token but does not rotate the refresh
    token. Logging in again replaces the user's refresh token, which ends any
    previous session.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        refresh_store: RefreshTokenStore,
        users: UserRepository,
        hasher: PasswordHasher | None = None,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for signing/decoding access JWTs.
        :param refresh_store: Stateful store for refresh credentials.
        :param users: User lookups for login.
        :param hasher: Password verifier.
        :param token_cfg: Access/Refresh expiry configuration.
        """
        super().__init__()
        self.tokens = token_provider
        self.refresh_store = refresh_store
        self.users = users
        self.hasher = hasher or PasswordHasher()
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a fresh access/refresh pair.

        Unknown email and wrong password fail identically, and both run one
        password verification.

        :raises UnauthorizedError: If credentials are invalid.
        """
        user = self.users.get_by_email(dto.email)
        if user is None:
            valid = self.hasher.verify_absent(dto.password)
        else:
            valid = self.hasher.verify(user.password_hash, dto.password)
        if user is None or not valid:
            log.warning("auth.login_failed")
            raise UnauthorizedError("Invalid credentials")

        access = self.issue_access(user.id)
        refresh = self.issue_refresh(user.id)
        log.info("auth.login", extra={"record_id": user.id})
        return LoginOut(user=user, access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Access tokens (stateless)
    # ------------------------------------------------------------------ #

    def issue_access(self, user_id: int) -> str:
        """Sign an access token for ``user_id`` valid for ``cfg.access_expires``."""
        return self.tokens.create_access_token(
            identity=str(user_id), expires_delta=self.cfg.access_expires
        )

    def verify_access(self, token: str) -> int:
        """
        Check signature and expiry, and return the user id in ``sub``.

        :raises UnauthorizedError: On any signature, format, expiry or subject problem.
        """
        if not token:
            raise UnauthorizedError("Missing token.")
        claims = self.tokens.decode(token)
        return self._coerce_user_id(claims.get("sub"))

    # ------------------------------------------------------------------ #
    # Refresh tokens (stateful)
    # ------------------------------------------------------------------ #

    def issue_refresh(self, user_id: int) -> str:
        """
        Generate and store a new refresh token for ``user_id``.

        Any previous refresh token of the same user is superseded.
        """
        token = secrets.token_hex(REFRESH_TOKEN_BYTES)
        self.refresh_store.save(
            user_id=user_id,
            token=token,
            expires_at=self.now_utc() + self.cfg.refresh_expires,
        )
        return token

    def refresh(self, token: str) -> str:
        """
        Exchange a refresh token for a new access token.

        Unknown and expired tokens are both ``UnauthorizedError``. An expired
        token is left in place; it is only removed by revoke or a new login.
        """
        record = self.refresh_store.get_by_token(token) if token else None
        if record is None:
            log.warning("auth.refresh_unknown")
            raise UnauthorizedError("Refresh token is no longer valid. Please sign in.")
        if not record.is_active(self.now_utc()):
            log.warning("auth.refresh_expired", extra={"record_id": record.user_id})
            raise UnauthorizedError("Refresh token is no longer valid. Please sign in.")
        return self.issue_access(record.user_id)

    def revoke(self, token: str) -> None:
        """
        Delete the refresh token.

        :raises NotFoundError: If no stored refresh token matches.
        """
        if not token or not self.refresh_store.delete_by_token(token):
            raise NotFoundError("RefreshToken", "<redacted>")
        log.info("auth.revoke")

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def _coerce_user_id(subject: object) -> int:
        """Ensure the JWT subject can be treated as an integer user id."""
        if isinstance(subject, int) and not isinstance(subject, bool):
            return subject
        if isinstance(subject, str) and subject.isascii() and subject.isdigit():
            return int(subject)
        raise UnauthorizedError("Invalid token subject.")

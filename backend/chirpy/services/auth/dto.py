# chirpy/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from chirpy.models import User

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email (normalized by the repository lookup).
    :type email: str
    :param password: Raw password (to be verified, never stored or logged).
    :type password: str
    """

    email: str
    password: str = field(repr=False)


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO with the authenticated user and both credentials.

    :param user: Authenticated user.
    :param access_token: Signed access JWT.
    :param refresh_token: Opaque 64-char hex refresh credential.
    """

    user: User
    access_token: str
    refresh_token: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta = timedelta(hours=1)
    refresh_expires: timedelta = timedelta(days=60)

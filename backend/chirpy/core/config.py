"""Settings classes, one per deployment environment.

``APP_ENV`` picks the class (``development`` by default); individual values
come from environment variables, optionally loaded from a ``.env`` file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"
TOKEN_ISSUER: Final[str] = "chirpy"

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag; ``1/true/yes/y/on`` (any case) are true, unset gives ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_seconds(name: str, default: int) -> timedelta:
    """Read a duration given in whole seconds; unset or blank gives ``default``."""
    raw = os.getenv(name, "").strip()
    return timedelta(seconds=int(raw) if raw else default)


class BaseConfig:
    """Values shared by every environment.

    Attributes
    ----------
    JWT_SECRET_KEY: str
        HS256 signing key for access tokens (``JWT_SECRET`` also accepted).
    JWT_ACCESS_TOKEN_EXPIRES / REFRESH_TOKEN_EXPIRES: timedelta
        Token lifetimes, one hour and sixty days unless overridden.
    DATABASE_PATH: str
        JSON document holding every collection.
    DATABASE_RESET: bool
        Start from an empty document, discarding the existing one.
    POLKA_API_KEY: str
        Key the payment provider presents as ``Authorization: ApiKey <key>``.
    PASSWORD_HASH_METHOD: str
        Werkzeug method string, work factor included.
    """

    API_BASE_PREFIX = "/api"
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")

    # Tokens
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY") or os.getenv("JWT_SECRET", "CHANGE_ME_JWT")
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ENCODE_ISSUER = TOKEN_ISSUER
    JWT_DECODE_ISSUER = TOKEN_ISSUER
    JWT_ACCESS_TOKEN_EXPIRES = env_seconds("JWT_ACCESS_TOKEN_EXPIRES", 60 * 60)
    REFRESH_TOKEN_EXPIRES = env_seconds("REFRESH_TOKEN_EXPIRES", 60 * 24 * 60 * 60)
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt:32768:8:1")

    POLKA_API_KEY = os.getenv("POLKA_API_KEY", "")

    # Storage
    DATABASE_PATH = os.getenv("DATABASE_PATH", "database.json")
    DATABASE_RESET = env_bool("DATABASE_RESET", False)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PROPAGATE_EXCEPTIONS = False
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on unless ``FLASK_DEBUG=0``."""

    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """Test runs: fresh document, fixed keys and a cheap hash work factor."""

    TESTING = True
    DATABASE_PATH = os.getenv("TEST_DATABASE_PATH", "test-database.json")
    DATABASE_RESET = True
    JWT_SECRET_KEY = "testing-secret-key-with-enough-bytes-for-hs256"
    POLKA_API_KEY = "test-polka-key"
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    DATABASE_RESET = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the settings class named by ``APP_ENV``.

    Unknown or missing names fall back to :class:`DevelopmentConfig`.
    """
    return CONFIG_MAP.get(os.getenv(ENV_VAR, "development").strip().lower(), DevelopmentConfig)

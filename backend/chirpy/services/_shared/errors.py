"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between the document store,
repositories, and application services.

The translation to HTTP responses (RFC 7807) is handled by
``chirpy/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from the store, repositories or services.
    - ``BaseService.translate_exceptions`` turns them into ``APIError``.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationFailure(ServiceError):
    """Raised when input is malformed or oversized (e.g. a chirp over 140 chars)."""


class UnauthorizedError(ServiceError):
    """
    Raised when a credential is missing, invalid, or expired.

    Unknown and expired credentials share this type on purpose so callers
    cannot tell them apart at the trust boundary.
    """

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ForbiddenError(ServiceError):
    """Raised when an authenticated caller is not entitled to the target record."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when a record is not found in a collection.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a uniqueness rule is violated.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class DuplicateEmailError(ConflictError):
    """Raised when a normalized email is already used by another user."""

    def __init__(self, email: str) -> None:
        super().__init__("User", f"email already registered: {email}")


class StorageError(ServiceError):
    """
    Raised when the backing document cannot be read, parsed, or written.

    At startup this is fatal; during a request it surfaces as a 500.
    """

"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories, domain
models, and application services.

Each class carries an ``http_status`` hint; the translation to the JSON
error envelope is handled by ``vidhub/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL includes the constraint name in the message. SQLite reports
    the offending columns instead (``UNIQUE constraint failed: users.email``),
    so the column suffix of conventional ``uq_<table>_<column>`` names is
    matched as a fallback.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Database constraint name (e.g. ``uq_users_email``).
    :returns: ``True`` if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if name.startswith("uq_"):
        table, _, column = name[3:].partition("_")
        return f"{table}.{column}" in message
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - The error handlers in ``vidhub.core.errors`` render them.
    """

    http_status = 400


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Malformed or missing input (length, strength, format)."""

    http_status = 400


class InvalidOperationError(ServiceError):
    """Semantically illegal request, e.g. subscribing to yourself."""

    http_status = 400


class ConflictError(ValidationError):
    """
    Raised when a unique constraint is violated (username/email taken).

    :param entity: Entity name (e.g., "User").
    :param detail: Short human-readable explanation.
    """

    http_status = 409

    def __init__(self, entity: str, detail: str) -> None:
        super().__init__(f"{entity} with {detail}")
        self.entity = entity
        self.detail = detail


class AuthenticationError(ServiceError):
    """Missing, invalid, expired or reused credential."""

    http_status = 401

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message)


class TokenErrorReason(str, Enum):
    EXPIRED = "expired"
    MALFORMED = "malformed"
    SIGNATURE_INVALID = "signature_invalid"


class TokenError(AuthenticationError):
    """
    Token verification failure.

    :param reason: Why verification failed.
    """

    def __init__(self, reason: TokenErrorReason, message: str | None = None) -> None:
        super().__init__(message or f"Invalid token ({reason.value})")
        self.reason = reason


class AuthorizationError(ServiceError):
    """Authenticated but not allowed (not the owner)."""

    http_status = 403


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int
    http_status = 404

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


class InternalError(ServiceError):
    """Store or signing failure the caller cannot fix."""

    http_status = 500

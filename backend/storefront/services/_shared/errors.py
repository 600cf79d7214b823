"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask, HTTP, or Redis directly. They serve as stable contracts between
repositories, ports, the Auth Gate and application services.

The translation to HTTP responses (RFC 7807) is handled by
``storefront/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint name (e.g. ``uq_users_email``) or a
        distinctive fragment of the dialect's message.
    :returns: True if the IntegrityError mentions the constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``code`` is a stable, machine-readable identifier surfaced to clients.
    """

    code = "bad_request"


class ValidationError(ServiceError):
    """Raised when caller input is malformed (short password, bad quantity...)."""

    code = "validation_error"


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Product").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    :param detail: Optional client-facing message replacing the default one.
    :type detail: str | None
    """

    entity: str
    key: str | int
    detail: str | None = None

    def __str__(self) -> str:
        return self.detail or f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Order").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


# --------------------------------------------------------------------------- #
# Authentication / authorization
# --------------------------------------------------------------------------- #


class UnauthorizedError(ServiceError):
    """Credential missing, invalid, expired or revoked, or identity vanished."""

    code = "unauthorized"


class MissingTokenError(UnauthorizedError):
    """No credential was presented on the request."""

    code = "token_missing"


class InvalidTokenError(UnauthorizedError):
    """Malformed token, wrong token type or bad signature. Re-login required."""

    code = "token_invalid"


class ExpiredTokenError(UnauthorizedError):
    """Well-formed token past its expiry. Clients may refresh and retry."""

    code = "token_expired"


class RevokedTokenError(UnauthorizedError):
    """Refresh token superseded or deleted server-side."""

    code = "token_revoked"


class ForbiddenError(ServiceError):
    """Authenticated identity lacks the required role."""

    code = "forbidden"


# --------------------------------------------------------------------------- #
# Infrastructure / external collaborators
# --------------------------------------------------------------------------- #


class StoreUnavailableError(ServiceError):
    """Backing store timed out or is down (distinct from business failures)."""

    code = "service_unavailable"


class PaymentDeclinedError(ServiceError):
    """The payment gateway reports the order as not paid."""

    code = "payment_declined"

    def __init__(self, message: str, *, status: str) -> None:
        super().__init__(message)
        self.status = status

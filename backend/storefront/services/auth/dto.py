# storefront/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from storefront.services.tokens.dto import TokenPairOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for account creation.

    :param name: Display name.
    :type name: str
    :param email: User email (normalized by the model).
    :type email: str
    :param password: Raw password (hashed by the model).
    :type password: str
    """

    name: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class IdentityOut:
    """
    Public identity projection. Never carries the password hash.

    :param id: Identity id.
    :param name: Display name.
    :param email: Normalized email.
    :param role: ``customer`` or ``admin``.
    """

    id: int
    name: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass(frozen=True, slots=True)
class SessionOut:
    """
    Result of signup/login.

    :param identity: Public identity.
    :param tokens: Issued pair, or ``None`` when the session cache was down
        during signup (the account exists but the client must log in later).
    """

    identity: IdentityOut
    tokens: TokenPairOut | None

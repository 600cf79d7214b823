# storefront/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from storefront.models.user import Role, User
from storefront.repositories.user import UserRepository
from storefront.services._shared.base import BaseService, ServiceContext
from storefront.services._shared.errors import (
    ServiceError,
    StoreUnavailableError,
    UnauthorizedError,
    ValidationError,
    violates,
)
from storefront.services.auth.dto import IdentityOut, LoginIn, SessionOut, SignupIn
from storefront.services.tokens.service import TokenService

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def to_identity(user: User) -> IdentityOut:
    """Project a :class:`User` onto its public fields."""
    return IdentityOut(id=user.id, name=user.name, email=user.email, role=Role(user.role).value)


class AuthService(BaseService):
    """
    Account lifecycle service (signup / login / logout / identity lookup).

    Credentials are checked against the user store; sessions are delegated to
    :class:`TokenService`.
    """

    def __init__(self, *, token_service: TokenService, ctx: ServiceContext | None = None) -> None:
        """
        :param token_service: Service issuing and revoking token pairs.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_service

    # ------------------------------------------------------------------ #
    # Signup
    # ------------------------------------------------------------------ #

    def signup(self, dto: SignupIn) -> SessionOut:
        """
        Create a customer account and open a session for it.

        The account is committed before tokens are issued. A session cache
        outage at that point is tolerated: the account stays created and the
        result carries no tokens.

        :raises ValidationError: Missing fields, short password or duplicate email.
        """
        if not (dto.name and dto.name.strip()) or not dto.email or not dto.password:
            raise ValidationError("All fields are required")
        if len(dto.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email):
                raise ValidationError("Email already exists")
            try:
                user = repo.add(
                    User(
                        name=dto.name,
                        email=dto.email,
                        password=dto.password,
                        role=Role.CUSTOMER.value,
                    )
                )
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "email"):
                    raise ValidationError("Email already exists") from exc
                raise
            identity = to_identity(user)

        log.info("Account created", extra={"user_id": str(identity.id)})
        try:
            tokens = self.tokens.issue(identity.id)
        except StoreUnavailableError:
            log.warning(
                "Session not established after signup",
                extra={"user_id": str(identity.id), "reason": "session_cache_unavailable"},
            )
            tokens = None
        return SessionOut(identity=identity, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> SessionOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :raises ServiceError: If credentials are invalid.
        :raises StoreUnavailableError: If the session cannot be recorded.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.email or "", dto.password or "")
            if user is None:
                log.info("Login failed", extra={"reason": "invalid_credentials"})
                raise ServiceError("Invalid credentials")
            identity = to_identity(user)

        tokens = self.tokens.issue(identity.id)
        log.info("Login succeeded", extra={"user_id": str(identity.id)})
        return SessionOut(identity=identity, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, refresh_token: str | None) -> None:
        """
        Best-effort session revocation. Never raises.

        A missing, malformed, expired or already revoked refresh token is
        tolerated, and so is a session cache outage.
        """
        if not refresh_token:
            return
        try:
            identity_id = self.tokens.subject_of_refresh(refresh_token)
        except UnauthorizedError as exc:
            log.info("Logout without a usable refresh token", extra={"reason": exc.code})
            return
        try:
            self.tokens.revoke(identity_id)
        except StoreUnavailableError:
            log.warning(
                "Session not revoked on logout",
                extra={"user_id": str(identity_id), "reason": "session_cache_unavailable"},
            )

    # ------------------------------------------------------------------ #
    # Identity lookup
    # ------------------------------------------------------------------ #

    def resolve_identity(self, identity_id: int) -> IdentityOut | None:
        """Return the public identity for ``identity_id`` or ``None`` if it vanished."""
        with self.ro_uow() as uow:
            user = uow.users.get(identity_id)
            return to_identity(user) if user is not None else None

"""Request gate: authenticate the access cookie, then authorize by role.

A gate is an ordered list of stages run before the view. Each stage reads and
enriches the per-request :class:`GateContext` stored on :data:`flask.g`; the
first stage to raise short-circuits the request and the error handlers turn
the exception into a problem response.

Usage::

    @bp.get("/profile")
    @authenticated
    def profile(): ...

    @bp.get("/analytics")
    @admin_only
    def analytics(): ...
"""

from __future__ import annotations

import functools
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from flask import g

from storefront.api import deps
from storefront.models.user import Role
from storefront.services._shared.errors import (
    ExpiredTokenError,
    ForbiddenError,
    InvalidTokenError,
    MissingTokenError,
    UnauthorizedError,
)
from storefront.services.auth.dto import IdentityOut

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(slots=True)
class GateContext:
    """
    Per-request authentication state.

    :param token: Raw access token read from the cookie.
    :param identity: Identity attached by :class:`Authenticate`.
    """

    token: str | None = None
    identity: IdentityOut | None = None


class Stage(ABC):
    """One step of an :class:`AuthGate`; raises to stop the request."""

    @abstractmethod
    def run(self, ctx: GateContext) -> None: ...


class Authenticate(Stage):
    """
    Verify the access cookie and attach the identity it names.

    :param token_service: Factory returning the token service.
    :param auth_service: Factory returning the auth service.
    """

    def __init__(
        self,
        *,
        token_service: Callable[[], Any] | None = None,
        auth_service: Callable[[], Any] | None = None,
    ) -> None:
        self._token_service = token_service or deps.get_token_service
        self._auth_service = auth_service or deps.get_auth_service

    def run(self, ctx: GateContext) -> None:
        token = deps.access_cookie()
        if not token:
            raise MissingTokenError("Unauthorized - No access token provided")
        ctx.token = token

        try:
            identity_id = self._token_service().verify_access(token)
        except ExpiredTokenError as exc:
            raise ExpiredTokenError("Unauthorized - Access token expired") from exc
        except UnauthorizedError as exc:
            raise InvalidTokenError("Unauthorized - Invalid access token") from exc

        identity = self._auth_service().resolve_identity(identity_id)
        if identity is None:
            log.info("Token subject not found", extra={"user_id": str(identity_id)})
            raise UnauthorizedError("User not found")
        ctx.identity = identity


class Authorize(Stage):
    """
    Require the attached identity to hold ``role``.

    :param role: Required role.
    """

    def __init__(self, role: Role = Role.ADMIN) -> None:
        self.role = Role(role)

    def run(self, ctx: GateContext) -> None:
        if ctx.identity is None:
            raise RuntimeError("Authorize stage ran without an authenticated identity")
        if ctx.identity.role != self.role.value:
            log.info(
                "Access denied",
                extra={"user_id": str(ctx.identity.id), "reason": f"requires_{self.role.value}"},
            )
            raise ForbiddenError(f"Access denied - {self.role.value.capitalize()} only")


class AuthGate:
    """
    Ordered composition of stages, usable as a view decorator.

    :param stages: Stages in execution order.
    :raises ValueError: When an :class:`Authorize` is not preceded by an
        :class:`Authenticate`.
    """

    def __init__(self, *stages: Stage) -> None:
        self.stages: tuple[Stage, ...] = tuple(stages)
        self._validate(self.stages)

    @staticmethod
    def _validate(stages: Sequence[Stage]) -> None:
        authenticated = False
        for stage in stages:
            if isinstance(stage, Authenticate):
                authenticated = True
            elif isinstance(stage, Authorize) and not authenticated:
                raise ValueError("Authorize must be preceded by Authenticate")

    def then(self, *stages: Stage) -> AuthGate:
        """Return a new gate running ``stages`` after this gate's stages."""
        return AuthGate(*self.stages, *stages)

    def check(self) -> GateContext:
        """Run every stage against a fresh context stored on ``g.gate``."""
        ctx = GateContext()
        g.gate = ctx
        for stage in self.stages:
            stage.run(ctx)
        return ctx

    def __call__(self, view: F) -> F:
        @functools.wraps(view)
        def wrapper(*args: Any, **kwargs: Any):
            self.check()
            return view(*args, **kwargs)

        return wrapper  # type: ignore[return-value]


def current_identity() -> IdentityOut:
    """Return the identity attached by the gate for this request."""
    ctx = g.get("gate")
    if ctx is None or ctx.identity is None:
        raise RuntimeError("No authenticated identity on this request")
    return ctx.identity


authenticated = AuthGate(Authenticate())
admin_only = authenticated.then(Authorize(Role.ADMIN))

__all__ = [
    "GateContext",
    "Stage",
    "Authenticate",
    "Authorize",
    "AuthGate",
    "authenticated",
    "admin_only",
    "current_identity",
]

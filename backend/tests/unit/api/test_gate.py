# tests/unit/api/test_gate.py
"""Unit tests for the request gate stages and their composition."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import UTC, datetime, timedelta

import pytest
from flask import g
from storefront.api.gate import (
    AuthGate,
    Authenticate,
    Authorize,
    GateContext,
    Stage,
    current_identity,
)
from storefront.models.user import Role
from storefront.services._shared.errors import (
    ExpiredTokenError,
    ForbiddenError,
    InvalidTokenError,
    MissingTokenError,
    UnauthorizedError,
)
from storefront.services._shared.ports import InMemorySessionCache, StubTokenProvider
from storefront.services.auth.dto import IdentityOut
from storefront.services.tokens.service import TokenService

CUSTOMER = IdentityOut(id=1, name="Cid", email="cid@example.com", role="customer")
ADMIN = IdentityOut(id=2, name="Ada", email="ada@example.com", role="admin")


class FakeAuthService:
    def __init__(self, *identities: IdentityOut):
        self.by_id = {i.id: i for i in identities}

    def resolve_identity(self, identity_id):
        return self.by_id.get(identity_id)


class Clock:
    def __init__(self):
        self.now = datetime(2026, 6, 1, tzinfo=UTC)

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return Clock()


@pytest.fixture()
def tokens(clock):
    return TokenService(
        token_provider=StubTokenProvider(clock=clock), session_cache=InMemorySessionCache()
    )


@pytest.fixture()
def authenticate(tokens):
    auth = FakeAuthService(CUSTOMER, ADMIN)
    return Authenticate(token_service=lambda: tokens, auth_service=lambda: auth)


@contextmanager
def _request(app, token=None):
    """Fresh app and request contexts, optionally carrying an access cookie."""
    headers = {}
    if token is not None:
        headers["Cookie"] = f"{app.config['JWT_ACCESS_COOKIE_NAME']}={token}"
    with app.app_context(), app.test_request_context("/", headers=headers):
        yield


def _access(tokens, identity_id):
    return tokens.tokens.create_access_token(identity=identity_id)


# ----------------------------- Authenticate -------------------------------- #
def test_missing_cookie(app, authenticate):
    with _request(app), pytest.raises(MissingTokenError, match="No access token provided"):
        AuthGate(authenticate).check()


def test_invalid_token(app, authenticate):
    with _request(app, "forged"), pytest.raises(
        InvalidTokenError, match="Invalid access token"
    ):
        AuthGate(authenticate).check()


def test_refresh_token_is_not_an_access_token(app, authenticate, tokens):
    refresh = tokens.tokens.create_refresh_token(identity=1)

    with _request(app, refresh), pytest.raises(InvalidTokenError):
        AuthGate(authenticate).check()


def test_expired_token(app, authenticate, tokens, clock):
    token = _access(tokens, 1)
    clock.now += timedelta(minutes=16)

    with _request(app, token), pytest.raises(ExpiredTokenError, match="Access token expired"):
        AuthGate(authenticate).check()


def test_vanished_identity(app, authenticate, tokens):
    token = _access(tokens, 99)

    with _request(app, token), pytest.raises(UnauthorizedError, match="User not found"):
        AuthGate(authenticate).check()


def test_attaches_identity(app, authenticate, tokens):
    with _request(app, _access(tokens, 1)):
        ctx = AuthGate(authenticate).check()

        assert ctx.identity == CUSTOMER
        assert g.gate is ctx
        assert current_identity() == CUSTOMER


# ------------------------------- Authorize --------------------------------- #
def test_customer_is_forbidden_from_admin_gate(app, authenticate, tokens):
    gate = AuthGate(authenticate, Authorize(Role.ADMIN))

    with _request(app, _access(tokens, 1)), pytest.raises(
        ForbiddenError, match="Access denied - Admin only"
    ):
        gate.check()


def test_admin_passes_admin_gate(app, authenticate, tokens):
    gate = AuthGate(authenticate).then(Authorize(Role.ADMIN))

    with _request(app, _access(tokens, 2)):
        assert gate.check().identity == ADMIN


def test_unauthenticated_beats_forbidden(app, authenticate):
    gate = AuthGate(authenticate, Authorize(Role.ADMIN))

    with _request(app), pytest.raises(MissingTokenError):
        gate.check()


def test_authorize_requires_preceding_authenticate(authenticate):
    with pytest.raises(ValueError, match="Authorize must be preceded by Authenticate"):
        AuthGate(Authorize(Role.ADMIN), authenticate)


def test_current_identity_outside_gate(app):
    with _request(app), pytest.raises(RuntimeError):
        current_identity()


def test_gate_as_decorator(app, authenticate, tokens):
    @AuthGate(authenticate)
    def view():
        return current_identity().email

    with _request(app, _access(tokens, 2)):
        assert view() == "ada@example.com"


def test_stage_requires_run():
    class Incomplete(Stage):
        pass

    with pytest.raises(TypeError):
        Incomplete()


def test_custom_stage_runs_after_authenticate(app, authenticate, tokens):
    seen: list[GateContext] = []

    class Record(Stage):
        def run(self, ctx: GateContext) -> None:
            seen.append(ctx)

    with _request(app, _access(tokens, CUSTOMER.id)):
        AuthGate(authenticate, Record()).check()

    assert seen[0].identity == CUSTOMER

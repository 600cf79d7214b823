# tests/unit/services/test_auth_service.py
from __future__ import annotations

import pytest
from storefront.models.user import User
from storefront.services._shared.errors import (
    ServiceError,
    StoreUnavailableError,
    ValidationError,
)
from storefront.services._shared.ports import InMemorySessionCache, StubTokenProvider
from storefront.services.auth.dto import LoginIn, SignupIn
from storefront.services.auth.service import AuthService
from storefront.services.tokens.service import TokenService
from tests.factories.user import UserFactory
from tests.helpers.utils import not_raises


class DownCache(InMemorySessionCache):
    def set(self, key, value, *, ttl=None):
        raise StoreUnavailableError("down")

    def delete(self, key):
        raise StoreUnavailableError("down")


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def cache() -> InMemorySessionCache:
    return InMemorySessionCache()


@pytest.fixture()
def service(cache) -> AuthService:
    """Build an AuthService wired to in-memory doubles."""
    return AuthService(
        token_service=TokenService(token_provider=StubTokenProvider(), session_cache=cache)
    )


def _down_service() -> AuthService:
    return AuthService(
        token_service=TokenService(token_provider=StubTokenProvider(), session_cache=DownCache())
    )


# -------------------------------- Signup ---------------------------------- #
def test_signup_creates_customer_and_session(service, cache, session):
    out = service.signup(SignupIn(name="Ana", email="Ana@Example.com", password="secret1"))

    assert out.identity.role == "customer"
    assert out.identity.email == "ana@example.com"
    assert out.tokens is not None
    assert cache.get(f"refresh:{out.identity.id}") == out.tokens.refresh_token
    stored = session.get(User, out.identity.id)
    assert stored.verify_password("secret1")


def test_signup_rejects_short_password(service):
    with pytest.raises(ValidationError, match="Password must be at least 6 characters"):
        service.signup(SignupIn(name="Ana", email="a@example.com", password="12345"))


def test_signup_requires_all_fields(service):
    with pytest.raises(ValidationError, match="All fields are required"):
        service.signup(SignupIn(name=" ", email="a@example.com", password="secret1"))


def test_signup_rejects_duplicate_email(service, session):
    UserFactory(email="dup@example.com")
    session.commit()

    with pytest.raises(ValidationError, match="Email already exists"):
        service.signup(SignupIn(name="Dup", email="DUP@example.com", password="secret1"))


def test_signup_degrades_when_cache_is_down(session):
    out = _down_service().signup(SignupIn(name="Bo", email="bo@example.com", password="secret1"))

    assert out.tokens is None
    assert session.get(User, out.identity.id) is not None


# -------------------------------- Login ----------------------------------- #
def test_login_issues_token_pair(service, cache, session):
    user = UserFactory(email="login@example.com", password="secret1")
    session.commit()

    out = service.login(LoginIn(email="login@example.com", password="secret1"))

    assert out.identity.id == user.id
    assert out.tokens.access_token.startswith("access.")
    assert cache.get(f"refresh:{user.id}") == out.tokens.refresh_token


def test_login_invalid_credentials(service, session):
    UserFactory(email="known@example.com", password="secret1")
    session.commit()

    with pytest.raises(ServiceError, match="Invalid credentials"):
        service.login(LoginIn(email="known@example.com", password="wrong!!"))
    with pytest.raises(ServiceError, match="Invalid credentials"):
        service.login(LoginIn(email="missing@example.com", password="secret1"))


def test_login_surfaces_cache_outage(session):
    UserFactory(email="down@example.com", password="secret1")
    session.commit()

    with pytest.raises(StoreUnavailableError):
        _down_service().login(LoginIn(email="down@example.com", password="secret1"))


# -------------------------------- Logout ---------------------------------- #
def test_logout_revokes_session(service, cache, session):
    UserFactory(email="out@example.com", password="secret1")
    session.commit()
    out = service.login(LoginIn(email="out@example.com", password="secret1"))

    service.logout(out.tokens.refresh_token)

    assert cache.get(f"refresh:{out.identity.id}") is None


def test_logout_is_idempotent(service):
    with not_raises(ServiceError):
        service.logout(None)
        service.logout("")
        service.logout("garbage")


def test_logout_tolerates_cache_outage(session):
    service = _down_service()
    token = service.tokens.tokens.create_refresh_token(identity=1)

    with not_raises(ServiceError):
        service.logout(token)


# ------------------------------ Identity ---------------------------------- #
def test_resolve_identity(service, session):
    user = UserFactory(name="Cleo")
    session.commit()

    identity = service.resolve_identity(user.id)

    assert identity.name == "Cleo"
    assert not hasattr(identity, "password_hash")
    assert service.resolve_identity(987654) is None

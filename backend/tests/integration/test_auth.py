"""Integration tests for authentication endpoints."""

from __future__ import annotations

from tests.factories.user import UserFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.auth import API, expired_token, login, set_access_cookie

SIGNUP = {"name": "Sam Shopper", "email": "sam@example.com", "password": "secret123"}


def test_signup_creates_customer_with_cookies(client, session_cache) -> None:
    """Signup returns 201, the public identity and both credential cookies."""

    resp = client.post(f"{API}/auth/signup", json=SIGNUP)

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["email"] == "sam@example.com"
    assert data["role"] == "customer"
    assert "password" not in data and "password_hash" not in data
    assert client.get_cookie("access_token") is not None
    refresh = client.get_cookie("refresh_token")
    assert refresh is not None
    assert session_cache.get(f"refresh:{data['id']}") == refresh.value


def test_signup_validation(client) -> None:
    resp = client.post(f"{API}/auth/signup", json={**SIGNUP, "password": "123"})
    assert_problem(resp, 400, code="validation_error", detail="Password must be at least 6 characters")

    resp = client.post(f"{API}/auth/signup", json={"email": "x@example.com"})
    assert_problem(resp, 400, code="validation_error", detail="All fields are required")


def test_signup_duplicate_email(client, session) -> None:
    UserFactory(email="sam@example.com")
    session.commit()

    resp = client.post(f"{API}/auth/signup", json=SIGNUP)

    assert_problem(resp, 400, detail="Email already exists")


def test_signup_duplicate_email_ignores_case(client, session) -> None:
    UserFactory(email="sam@example.com")
    session.commit()

    resp = client.post(f"{API}/auth/signup", json={**SIGNUP, "email": "SAM@Example.COM"})

    assert_problem(resp, 400, detail="Email already exists")


def test_login_and_profile(client, session) -> None:
    """A user can log in and read its profile through the access cookie."""

    user = UserFactory(email="pat@example.com", name="Pat")
    session.commit()
    user_id = user.id

    resp = login(client, "PAT@example.com")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["id"] == user_id

    resp = client.get(f"{API}/auth/profile")
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {
        "id": user_id,
        "name": "Pat",
        "email": "pat@example.com",
        "role": "customer",
    }


def test_login_wrong_password(client, session) -> None:
    UserFactory(email="pat@example.com")
    session.commit()

    resp = login(client, "pat@example.com", password="not-it")

    assert_problem(resp, 400, detail="Invalid credentials")
    assert client.get_cookie("access_token") is None


def test_login_requires_fields(client) -> None:
    resp = client.post(f"{API}/auth/login", json={"email": "pat@example.com"})

    assert_problem(resp, 400, code="validation_error", detail="Email and password are required")


def test_profile_requires_cookie(client) -> None:
    resp = client.get(f"{API}/auth/profile")

    assert_problem(
        resp, 401, code="token_missing", detail="Unauthorized - No access token provided"
    )


def test_profile_with_expired_cookie(app, client, session) -> None:
    user = UserFactory()
    session.commit()
    set_access_cookie(app, client, expired_token(app, user.id))

    resp = client.get(f"{API}/auth/profile")

    assert_problem(resp, 401, code="token_expired", detail="Unauthorized - Access token expired")


def test_profile_with_forged_cookie(app, client) -> None:
    set_access_cookie(app, client, "abc.def.ghi")

    resp = client.get(f"{API}/auth/profile")

    assert_problem(resp, 401, code="token_invalid", detail="Unauthorized - Invalid access token")


def test_refresh_then_logout(client, session) -> None:
    UserFactory(email="ref@example.com")
    session.commit()
    login(client, "ref@example.com")

    resp = client.post(f"{API}/auth/refresh-token")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Access token refreshed successfully"}

    resp = client.post(f"{API}/auth/logout")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Logged out successfully"}
    assert client.get_cookie("access_token") is None


def test_refresh_after_logout_is_revoked(client, session) -> None:
    UserFactory(email="rev@example.com")
    session.commit()
    login(client, "rev@example.com")
    stale = client.get_cookie("refresh_token").value

    client.post(f"{API}/auth/logout")
    client.set_cookie("refresh_token", stale)
    resp = client.post(f"{API}/auth/refresh-token")

    assert_problem(resp, 401, code="token_revoked")


def test_refresh_without_cookie(client) -> None:
    resp = client.post(f"{API}/auth/refresh-token")

    assert_problem(resp, 401, code="token_missing", detail="No refresh token provided")


def test_logout_is_idempotent(client) -> None:
    """Logout without any session still answers 200."""

    for _ in range(2):
        resp = client.post(f"{API}/auth/logout")
        assert resp.status_code == 200

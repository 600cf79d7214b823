# tests/unit/infra/test_jwt_token_provider.py
"""Unit tests for the Flask-JWT-Extended token adapter."""

from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time
from storefront.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from storefront.services._shared.errors import ExpiredTokenError, InvalidTokenError


@pytest.fixture
def provider(app):
    with app.app_context():
        yield JWTTokenProvider()


def test_access_token_round_trip(provider):
    token = provider.create_access_token(identity=42)

    claims = provider.decode(token)

    assert claims["sub"] == "42"
    assert claims["type"] == "access"


def test_refresh_token_carries_refresh_type(provider):
    claims = provider.decode(provider.create_refresh_token(identity=7))

    assert claims["sub"] == "7"
    assert claims["type"] == "refresh"


def test_expired_token(provider):
    with freeze_time("2026-01-01 00:00:00"):
        token = provider.create_access_token(identity=1, expires_delta=timedelta(minutes=15))

    with freeze_time("2026-01-01 00:16:00"), pytest.raises(ExpiredTokenError):
        provider.decode(token)


def test_tampered_signature(provider):
    token = provider.create_access_token(identity=1)
    header, payload, signature = token.split(".")
    forged = ".".join([header, payload, signature[::-1]])

    with pytest.raises(InvalidTokenError):
        provider.decode(forged)


def test_garbage_token(provider):
    with pytest.raises(InvalidTokenError):
        provider.decode("not-a-jwt")

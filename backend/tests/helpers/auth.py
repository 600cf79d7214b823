"""Authentication helpers for HTTP tests."""

from __future__ import annotations

from datetime import timedelta

from flask import Flask
from flask.testing import FlaskClient
from flask_jwt_extended import create_access_token

API = "/api/v1"


def login(client: FlaskClient, email: str, password: str = "Passw0rd!"):
    """Log in through the API; the client keeps the credential cookies.

    Returns
    -------
    werkzeug.test.TestResponse
        Response of ``POST /auth/login``.
    """
    return client.post(f"{API}/auth/login", json={"email": email, "password": password})


def set_access_cookie(app: Flask, client: FlaskClient, token: str) -> None:
    """Place ``token`` in the access cookie of ``client``."""
    client.set_cookie(app.config["JWT_ACCESS_COOKIE_NAME"], token)


def expired_token(app: Flask, identity: int) -> str:
    """Return an already expired access JWT for ``identity``."""
    with app.app_context():
        return create_access_token(identity=str(identity), expires_delta=timedelta(seconds=-1))

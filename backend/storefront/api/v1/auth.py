"""Authentication endpoints: signup, login, logout, refresh and profile."""

from __future__ import annotations

from flask import Blueprint
from flask_jwt_extended import set_access_cookies

from storefront.api.deps import (
    attach_tokens,
    clear_tokens,
    get_auth_service,
    get_token_service,
    json_body,
    json_response,
    refresh_cookie,
    timing,
)
from storefront.api.gate import authenticated, current_identity
from storefront.schemas import IdentitySchema, LoginSchema, SignupSchema
from storefront.services import LoginIn, SignupIn
from storefront.services._shared.errors import MissingTokenError

bp = Blueprint("auth", __name__, url_prefix="/auth")

signup_schema = SignupSchema()
login_schema = LoginSchema()
identity_schema = IdentitySchema()


@bp.post("/signup")
@timing
def signup():
    """Create a customer account and open a session when possible."""

    payload = signup_schema.load(json_body())
    session = get_auth_service().signup(SignupIn(**payload))
    response = json_response({"data": identity_schema.dump(session.identity)}, status=201)
    return attach_tokens(response, session.tokens)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and set both credential cookies."""

    payload = login_schema.load(json_body())
    session = get_auth_service().login(LoginIn(**payload))
    response = json_response({"data": identity_schema.dump(session.identity)})
    return attach_tokens(response, session.tokens)


@bp.post("/logout")
@timing
def logout():
    """Revoke the session (best-effort) and clear the cookies. Always 200."""

    get_auth_service().logout(refresh_cookie())
    response = json_response({"message": "Logged out successfully"})
    return clear_tokens(response)


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Mint a new access token from the refresh cookie."""

    token = refresh_cookie()
    if not token:
        raise MissingTokenError("No refresh token provided")
    access = get_token_service().refresh(token)
    response = json_response({"message": "Access token refreshed successfully"})
    set_access_cookies(response, access)
    return response


@bp.get("/profile")
@authenticated
@timing
def profile():
    """Return the authenticated identity."""

    return json_response({"data": identity_schema.dump(current_identity())})

# storefront/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended.exceptions import JWTExtendedException

from storefront.services._shared.errors import ExpiredTokenError, InvalidTokenError
from storefront.services._shared.ports import TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Access and refresh tokens share the application's ``JWT_SECRET_KEY``;
    their ``type`` claim (``access`` / ``refresh``) tells them apart.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def create_access_token(
        self,
        *,
        identity: int | str,
        expires_delta: timedelta | None = None,
    ) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        # Flask-JWT-Extended requires a string subject
        return cast(str, _create_access(identity=str(identity), expires_delta=expires_delta))

    def create_refresh_token(
        self,
        *,
        identity: int | str,
        expires_delta: timedelta | None = None,
    ) -> str:
        from flask_jwt_extended import create_refresh_token as _create_refresh

        return cast(str, _create_refresh(identity=str(identity), expires_delta=expires_delta))

    def decode(self, token: str) -> dict[str, Any]:
        from flask_jwt_extended import decode_token

        try:
            return cast(dict[str, Any], decode_token(token))
        except pyjwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError("Token expired") from exc
        except (pyjwt.InvalidTokenError, JWTExtendedException) as exc:
            raise InvalidTokenError("Invalid token") from exc

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from storefront.services._shared.errors import ExpiredTokenError, InvalidTokenError


class TokenProvider(Protocol):
    """
    Port for minting and decoding signed tokens.

    ``decode`` verifies signature and expiry and returns the claim set. It
    raises :class:`ExpiredTokenError` for a well-formed token past its expiry
    and :class:`InvalidTokenError` for anything else that fails verification.
    The ``type`` claim is ``"access"`` or ``"refresh"``.
    """

    def create_access_token(
        self,
        *,
        identity: int | str,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: int | str,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Tokens are opaque strings recorded in a local registry. Expiry is checked
    against ``clock`` so tests can move time forward without sleeping.
    """

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def _mk(self, *, identity: int | str, ttype: str, exp_delta: timedelta) -> str:
        self._seq += 1
        jti = f"jti-{self._seq}"
        token = f"{ttype}.{identity}.{jti}"
        now = self._clock()
        self._issued[token] = {
            "sub": str(identity),
            "type": ttype,
            "jti": jti,
            "iat": int(now.timestamp()),
            "exp": int((now + exp_delta).timestamp()),
        }
        return token

    def create_access_token(
        self,
        *,
        identity: int | str,
        expires_delta: timedelta | None = None,
    ) -> str:
        return self._mk(
            identity=identity,
            ttype="access",
            exp_delta=expires_delta or timedelta(minutes=15),
        )

    def create_refresh_token(
        self,
        *,
        identity: int | str,
        expires_delta: timedelta | None = None,
    ) -> str:
        return self._mk(
            identity=identity,
            ttype="refresh",
            exp_delta=expires_delta or timedelta(days=7),
        )

    def decode(self, token: str) -> dict[str, Any]:
        claims = self._issued.get(token)
        if claims is None:
            raise InvalidTokenError("Invalid token")
        if claims["exp"] <= int(self._clock().timestamp()):
            raise ExpiredTokenError("Token expired")
        return dict(claims)

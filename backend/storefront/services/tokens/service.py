"""
TokenService
============

Mints, refreshes and revokes the access/refresh token pair of an identity.

The service is the only reader/writer of ``refresh:<identity_id>`` entries in
the session cache. A refresh token is honoured only while it byte-equals the
stored entry, so issuing a new pair (login anywhere) or deleting the entry
(logout) revokes the previous refresh token immediately. Access tokens are
stateless and live until their own expiry.
"""

from __future__ import annotations

import hmac
import logging
from typing import Any

from storefront.services._shared.errors import (
    ExpiredTokenError,
    InvalidTokenError,
    RevokedTokenError,
)
from storefront.services._shared.ports.session_cache import SessionCache
from storefront.services._shared.ports.token_provider import TokenProvider
from storefront.services.tokens.dto import AuthTokenConfig, TokenPairOut

log = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"
SESSION_KEY_PREFIX = "refresh"


class TokenService:
    """
    Token lifecycle service (issue / refresh / revoke / verify).

    :param token_provider: Adapter for minting/decoding JWTs.
    :param session_cache: Store holding the current refresh token per identity.
    :param token_cfg: Access/Refresh lifetimes.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        session_cache: SessionCache,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        self.tokens = token_provider
        self.cache = session_cache
        self.cfg = token_cfg or AuthTokenConfig()

    @staticmethod
    def session_key(identity_id: int | str) -> str:
        return f"{SESSION_KEY_PREFIX}:{identity_id}"

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue(self, identity_id: int | str) -> TokenPairOut:
        """
        Mint a fresh token pair and record the refresh token server-side.

        Overwrites any previous entry, which revokes the refresh token of the
        identity's prior session (last write wins).

        :param identity_id: Identity the tokens are issued for.
        :returns: Access/Refresh token pair.
        :raises StoreUnavailableError: If the session cache write fails.
        """
        access = self.tokens.create_access_token(
            identity=identity_id, expires_delta=self.cfg.access_expires
        )
        refresh = self.tokens.create_refresh_token(
            identity=identity_id, expires_delta=self.cfg.refresh_expires
        )
        self.cache.set(self.session_key(identity_id), refresh, ttl=self.cfg.refresh_expires)
        log.info("Issued token pair", extra={"user_id": str(identity_id)})
        return TokenPairOut(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str) -> str:
        """
        Exchange a live refresh token for a new access token.

        The refresh token itself is not rotated.

        :param refresh_token: Encoded refresh JWT presented by the client.
        :returns: New encoded access JWT for the same identity.
        :raises InvalidTokenError: Malformed, wrong type or bad signature.
        :raises ExpiredTokenError: Past its own expiry.
        :raises RevokedTokenError: Superseded or deleted server-side.
        :raises StoreUnavailableError: If the session cache cannot be read.
        """
        try:
            claims = self._decode(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
        except ExpiredTokenError as exc:
            raise ExpiredTokenError("Refresh token expired") from exc
        except InvalidTokenError as exc:
            raise InvalidTokenError("Invalid refresh token") from exc

        subject = str(claims["sub"])
        stored = self.cache.get(self.session_key(subject))
        if stored is None or not hmac.compare_digest(stored.encode(), refresh_token.encode()):
            log.warning(
                "Refresh rejected", extra={"user_id": subject, "reason": "revoked"}
            )
            raise RevokedTokenError("Invalid or revoked refresh token")

        return self.tokens.create_access_token(
            identity=subject, expires_delta=self.cfg.access_expires
        )

    # ------------------------------------------------------------------ #
    # Revoke
    # ------------------------------------------------------------------ #

    def revoke(self, identity_id: int | str) -> bool:
        """
        Delete the identity's session entry. Idempotent.

        :returns: ``True`` when an entry existed.
        :raises StoreUnavailableError: If the session cache cannot be reached.
        """
        removed = self.cache.delete(self.session_key(identity_id))
        log.info(
            "Revoked session", extra={"user_id": str(identity_id), "reason": "logout"}
        )
        return removed

    # ------------------------------------------------------------------ #
    # Verification helpers
    # ------------------------------------------------------------------ #

    def verify_access(self, access_token: str) -> int:
        """
        Verify an access token (signature, expiry, type) and return its subject.

        The session cache is never consulted: access tokens cannot be revoked
        before they expire.

        :raises ExpiredTokenError: Past its expiry.
        :raises InvalidTokenError: Anything else.
        """
        claims = self._decode(access_token, expected_type=ACCESS_TOKEN_TYPE)
        return self._coerce_identity_id(claims["sub"])

    def subject_of_refresh(self, refresh_token: str) -> int:
        """Return the identity embedded in a verified refresh token."""
        claims = self._decode(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
        return self._coerce_identity_id(claims["sub"])

    def _decode(self, token: str, *, expected_type: str) -> dict[str, Any]:
        if not token:
            raise InvalidTokenError("Empty token")
        claims = self.tokens.decode(token)
        if claims.get("type") != expected_type:
            raise InvalidTokenError(f"Wrong token type: {expected_type} token required.")
        if "sub" not in claims:
            raise InvalidTokenError("Token has no subject")
        return claims

    @staticmethod
    def _coerce_identity_id(subject: Any) -> int:
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError("Token subject is not an identity id") from exc

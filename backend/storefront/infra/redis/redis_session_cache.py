# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from storefront.services._shared.errors import StoreUnavailableError
from storefront.services._shared.ports import SessionCache


@dataclass(slots=True)
class RedisSessionCache(SessionCache):
    """
    Redis-backed session cache.

    Every call is a single atomic Redis command; the client is expected to be
    created with ``socket_timeout`` so no call blocks indefinitely. Redis
    failures (timeouts included) surface as :class:`StoreUnavailableError`.

    :param r: A Redis client (already connected, ``decode_responses=True``).
    """

    r: redis.Redis

    @staticmethod
    def _decode(value: bytes | str | None) -> str | None:
        if isinstance(value, bytes | bytearray):
            return value.decode()
        return value

    def set(self, key: str, value: str, *, ttl: timedelta | None = None) -> None:
        try:
            if ttl is None:
                self.r.set(key, value)
            else:
                # Redis rejects non-positive expirations
                self.r.set(key, value, ex=max(1, int(ttl.total_seconds())))
        except RedisError as exc:
            raise StoreUnavailableError(f"Session cache write failed for {key!r}") from exc

    def get(self, key: str) -> str | None:
        try:
            return self._decode(self.r.get(key))
        except RedisError as exc:
            raise StoreUnavailableError(f"Session cache read failed for {key!r}") from exc

    def delete(self, key: str) -> bool:
        try:
            return cast(int, self.r.delete(key)) > 0
        except RedisError as exc:
            raise StoreUnavailableError(f"Session cache delete failed for {key!r}") from exc

    def ping(self) -> bool:
        try:
            return bool(self.r.ping())
        except RedisError:
            return False

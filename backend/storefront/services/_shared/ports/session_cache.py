from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol


class SessionCache(Protocol):
    """
    Key/value store with per-key expiry.

    Every operation is atomic at key level and bounded in time. Adapters MUST
    raise :class:`~storefront.services._shared.errors.StoreUnavailableError`
    when the backing store times out or is unreachable.
    """

    def set(self, key: str, value: str, *, ttl: timedelta | None = None) -> None: ...

    def get(self, key: str) -> str | None: ...

    def delete(self, key: str) -> bool: ...

    def ping(self) -> bool: ...


class InMemorySessionCache(SessionCache):
    """
    Thread-safe in-process cache with lazy expiry.

    Only suitable for tests and single-worker development servers: entries are
    not shared between processes.

    :param clock: Callable returning the current aware UTC datetime.
    """

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))
        self._lock = threading.Lock()
        self._data: dict[str, tuple[str, datetime | None]] = {}

    def set(self, key: str, value: str, *, ttl: timedelta | None = None) -> None:
        expires_at = self._clock() + ttl if ttl is not None else None
        with self._lock:
            self._data[key] = (value, expires_at)

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and expires_at <= self._clock():
                del self._data[key]
                return None
            return value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def ping(self) -> bool:
        return True

    def ttl(self, key: str) -> timedelta | None:
        """Remaining lifetime of ``key`` (``None`` when absent or persistent)."""
        with self._lock:
            entry = self._data.get(key)
        if entry is None or entry[1] is None:
            return None
        return entry[1] - self._clock()

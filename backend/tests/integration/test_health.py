"""Integration tests for the health endpoint."""

from __future__ import annotations

from storefront.services._shared.ports import InMemorySessionCache
from tests.helpers.auth import API


class DeadCache(InMemorySessionCache):
    def ping(self) -> bool:
        return False


def test_health_ok(client) -> None:
    resp = client.get(f"{API}/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["db"] == "ok"
    assert body["cache"] == "ok"
    assert resp.headers["X-Request-ID"]


def test_health_degraded_when_cache_down(app, client) -> None:
    from storefront.core.extensions import SESSION_CACHE_KEY

    app.extensions[SESSION_CACHE_KEY] = DeadCache()

    resp = client.get(f"{API}/health")

    assert resp.status_code == 503
    assert resp.get_json()["status"] == "degraded"


def test_unknown_route_is_problem(client) -> None:
    resp = client.get(f"{API}/nope")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"

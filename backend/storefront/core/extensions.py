"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import logging

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Import-safe singletons. Store clients (Redis) are NOT module globals: they
# live in ``app.extensions`` and are handed to services explicitly.
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

SESSION_CACHE_KEY = "session_cache"
PAYMENT_GATEWAY_KEY = "payment_gateway"


def _allows_doubles(app: Flask) -> bool:
    """Whether in-process doubles may stand in for Redis and the payment gateway."""
    return bool(app.debug or app.testing)


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the external store adapters.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`storefront.models` package to ensure SQLAlchemy metadata is ready
        for migrations.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from storefront import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    app.extensions[SESSION_CACHE_KEY] = _build_session_cache(app)
    app.extensions[PAYMENT_GATEWAY_KEY] = _build_payment_gateway(app)


def _build_session_cache(app: Flask):
    """Return the session cache adapter configured for ``app``.

    With ``REDIS_URL`` set, a Redis client bounded by ``REDIS_SOCKET_TIMEOUT``
    is created and pinged; an unreachable server at startup is a deployment
    error. Without it, debug and test runs get an in-process cache; any other
    environment refuses to start, since per-worker caches break revocation.
    """
    from storefront.services._shared.ports.session_cache import InMemorySessionCache

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        if not _allows_doubles(app):
            raise RuntimeError("REDIS_URL must be set outside debug and testing")
        if not app.testing:
            log.warning("REDIS_URL not set; using in-process session cache (single worker only)")
        return InMemorySessionCache()

    from storefront.infra.redis.redis_session_cache import RedisSessionCache

    timeout = float(app.config.get("REDIS_SOCKET_TIMEOUT", 2.0))
    client = redis.Redis.from_url(
        redis_url,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
        decode_responses=True,
    )
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    return RedisSessionCache(r=client)


def get_session_cache():
    """Return the session cache bound to the current application."""
    cache = current_app.extensions.get(SESSION_CACHE_KEY)
    if cache is None:
        raise RuntimeError("Session cache is not initialized. Call init_app() first.")
    return cache


def _build_payment_gateway(app: Flask):
    """Return the payment gateway adapter configured for ``app``.

    Without ``PAYMENT_GATEWAY_URL`` debug and test runs get an in-process stub
    whose orders stay ``ACTIVE`` until marked otherwise; any other environment
    refuses to start.
    """
    from storefront.services._shared.ports.payment_gateway import StubPaymentGateway

    base_url = app.config.get("PAYMENT_GATEWAY_URL")
    if not base_url:
        if not _allows_doubles(app):
            raise RuntimeError("PAYMENT_GATEWAY_URL must be set outside debug and testing")
        if not app.testing:
            log.warning("PAYMENT_GATEWAY_URL not set; using stub payment gateway")
        return StubPaymentGateway()

    from storefront.infra.payments.cashfree_gateway import CashfreePaymentGateway

    return CashfreePaymentGateway(
        base_url=base_url,
        client_id=app.config.get("PAYMENT_CLIENT_ID", ""),
        client_secret=app.config.get("PAYMENT_CLIENT_SECRET", ""),
        api_version=app.config.get("PAYMENT_API_VERSION", "2022-09-01"),
        currency=app.config.get("PAYMENT_CURRENCY", "INR"),
        timeout=float(app.config.get("PAYMENT_TIMEOUT", 10.0)),
    )


def get_payment_gateway():
    """Return the payment gateway bound to the current application."""
    gateway = current_app.extensions.get(PAYMENT_GATEWAY_KEY)
    if gateway is None:
        raise RuntimeError("Payment gateway is not initialized. Call init_app() first.")
    return gateway

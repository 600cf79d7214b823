"""Shared API helpers: request parsing, service wiring and credential cookies."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import set_access_cookies, set_refresh_cookies, unset_jwt_cookies

from storefront.core.extensions import get_payment_gateway, get_session_cache
from storefront.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from storefront.schemas.common import PaginationQuerySchema
from storefront.services import (
    AnalyticsService,
    AuthService,
    AuthTokenConfig,
    CartService,
    CatalogService,
    CheckoutConfig,
    CheckoutService,
    CouponService,
    ServiceContext,
    TokenPairOut,
    TokenService,
)
from storefront.services._shared.ports import PassthroughImageStore

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(slots=True)
class Pagination:
    """Container holding pagination arguments parsed from the request."""

    page: int
    limit: int


def parse_pagination(default_limit: int = 20, max_limit: int = 100) -> Pagination:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return Pagination(page=data["page"], limit=data["limit"])


def json_body() -> dict[str, Any]:
    """Return the JSON body of the request, or an empty mapping."""

    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def _context() -> ServiceContext:
    gate = g.get("gate")
    identity = getattr(gate, "identity", None)
    return ServiceContext(
        actor_id=identity.id if identity is not None else None,
        request_id=g.get("request_id"),
    )


def _token_config() -> AuthTokenConfig:
    cfg = current_app.config
    return AuthTokenConfig(
        access_expires=_as_timedelta(cfg.get("JWT_ACCESS_TOKEN_EXPIRES"), timedelta(minutes=15)),
        refresh_expires=_as_timedelta(cfg.get("JWT_REFRESH_TOKEN_EXPIRES"), timedelta(days=7)),
    )


def _as_timedelta(value: Any, default: timedelta) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return timedelta(seconds=value)
    return default


def get_token_service() -> TokenService:
    return TokenService(
        token_provider=JWTTokenProvider(),
        session_cache=get_session_cache(),
        token_cfg=_token_config(),
    )


def get_auth_service() -> AuthService:
    return AuthService(token_service=get_token_service(), ctx=_context())


def get_cart_service() -> CartService:
    return CartService(ctx=_context())


def get_catalog_service() -> CatalogService:
    return CatalogService(
        session_cache=get_session_cache(),
        image_store=PassthroughImageStore(),
        featured_key=current_app.config.get("FEATURED_CACHE_KEY", "featured_products"),
        ctx=_context(),
    )


def get_coupon_service() -> CouponService:
    return CouponService(ctx=_context())


def get_checkout_service() -> CheckoutService:
    cfg = current_app.config
    return CheckoutService(
        gateway=get_payment_gateway(),
        config=CheckoutConfig(
            frontend_url=cfg.get("FRONTEND_URL", "http://localhost:3000"),
            gift_threshold=float(cfg.get("GIFT_COUPON_THRESHOLD", 1000)),
            gift_percentage=int(cfg.get("GIFT_COUPON_PERCENTAGE", 10)),
            gift_valid_for=timedelta(days=int(cfg.get("GIFT_COUPON_DAYS", 30))),
        ),
        ctx=_context(),
    )


def get_analytics_service() -> AnalyticsService:
    return AnalyticsService(ctx=_context())


# --------------------------------------------------------------------------- #
# Credential cookies
# --------------------------------------------------------------------------- #


def access_cookie() -> str | None:
    return request.cookies.get(current_app.config["JWT_ACCESS_COOKIE_NAME"])


def refresh_cookie() -> str | None:
    return request.cookies.get(current_app.config["JWT_REFRESH_COOKIE_NAME"])


def attach_tokens(response: Response, tokens: TokenPairOut | None) -> Response:
    """Set both credential cookies on ``response`` when a pair was issued."""

    if tokens is not None:
        set_access_cookies(response, tokens.access_token)
        set_refresh_cookies(response, tokens.refresh_token)
    return response


def clear_tokens(response: Response) -> Response:
    unset_jwt_cookies(response)
    return response

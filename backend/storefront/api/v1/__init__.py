"""Version 1 of the storefront HTTP API.

:data:`REGISTRY` pairs every v1 blueprint with its mount point below
``/api/v1``; :func:`storefront.api.init_app` registers them in this order.
"""

from __future__ import annotations

from flask import Blueprint

from .analytics import bp as analytics_bp
from .auth import bp as auth_bp
from .cart import bp as cart_bp
from .coupons import bp as coupons_bp
from .health import bp as health_bp
from .payments import bp as payments_bp
from .products import bp as products_bp

API_VERSION = "v1"

REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),
    (auth_bp, "/auth"),
    (products_bp, "/products"),
    (cart_bp, "/cart"),
    (coupons_bp, "/coupons"),
    (payments_bp, "/payments"),
    (analytics_bp, "/analytics"),
]

"""Service layer public API.

This package exposes the building blocks of the service layer so that callers
can import from :mod:`storefront.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``storefront.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Shared DTOs (from ``storefront.services._shared.dto``)
    * :class:`PageMeta`

- Token service (from ``storefront.services.tokens``)
    * :class:`TokenService`
    * DTOs: :class:`TokenPairOut`, :class:`AuthTokenConfig`

- Auth service (from ``storefront.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`SignupIn`, :class:`LoginIn`, :class:`IdentityOut`,
      :class:`SessionOut`

- Shop services
    * :class:`CartService`, :class:`CatalogService`, :class:`CouponService`,
      :class:`CheckoutService`, :class:`AnalyticsService`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext

# Shared DTOs
from ._shared.dto import PageMeta
from .analytics.dto import AnalyticsOut, DailySalesOut, SummaryOut
from .analytics.service import AnalyticsService
from .auth.dto import IdentityOut, LoginIn, SessionOut, SignupIn
from .auth.service import AuthService
from .cart.dto import CartItemOut
from .cart.service import CartService
from .catalog.dto import ProductCreateIn, ProductListOut, ProductOut
from .catalog.service import CatalogService
from .checkout.dto import CheckoutConfig, CheckoutOut, ConfirmOut
from .checkout.service import CheckoutService
from .coupons.dto import CouponOut
from .coupons.service import CouponService
from .tokens.dto import AuthTokenConfig, TokenPairOut
from .tokens.service import TokenService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Shared DTOs
    "PageMeta",
    # Tokens
    "TokenService",
    "TokenPairOut",
    "AuthTokenConfig",
    # Auth
    "AuthService",
    "SignupIn",
    "LoginIn",
    "IdentityOut",
    "SessionOut",
    # Cart
    "CartService",
    "CartItemOut",
    # Catalog
    "CatalogService",
    "ProductCreateIn",
    "ProductOut",
    "ProductListOut",
    # Coupons
    "CouponService",
    "CouponOut",
    # Checkout
    "CheckoutService",
    "CheckoutConfig",
    "CheckoutOut",
    "ConfirmOut",
    # Analytics
    "AnalyticsService",
    "AnalyticsOut",
    "SummaryOut",
    "DailySalesOut",
]

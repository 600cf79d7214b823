"""Convenience exports for application schemas."""

from __future__ import annotations

from .analytics import AnalyticsSchema, DailySalesSchema, SummarySchema
from .auth import IdentitySchema, LoginSchema, SignupSchema
from .cart import CartAddSchema, CartItemSchema, CartQuantitySchema, CartRemoveSchema
from .common import MetaSchema, PaginationQuerySchema
from .coupon import CouponSchema, CouponValidateSchema
from .payment import CheckoutResultSchema, CheckoutSchema, ConfirmResultSchema, ConfirmSchema
from .product import ProductCreateSchema, ProductSchema

__all__ = [
    "SignupSchema",
    "LoginSchema",
    "IdentitySchema",
    "PaginationQuerySchema",
    "MetaSchema",
    "ProductSchema",
    "ProductCreateSchema",
    "CartAddSchema",
    "CartRemoveSchema",
    "CartQuantitySchema",
    "CartItemSchema",
    "CouponSchema",
    "CouponValidateSchema",
    "CheckoutSchema",
    "ConfirmSchema",
    "CheckoutResultSchema",
    "ConfirmResultSchema",
    "AnalyticsSchema",
    "SummarySchema",
    "DailySalesSchema",
]

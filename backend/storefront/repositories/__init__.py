"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from storefront.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
)
from storefront.repositories.coupon import CouponRepository
from storefront.repositories.order import OrderRepository
from storefront.repositories.product import ProductRepository
from storefront.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    # Domain
    "CouponRepository",
    "OrderRepository",
    "ProductRepository",
    "UserRepository",
]

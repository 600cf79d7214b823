# storefront/services/coupons/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront.models.base import as_utc
from storefront.models.coupon import Coupon


@dataclass(frozen=True, slots=True)
class CouponOut:
    """
    Public coupon projection.

    :param code: Coupon code.
    :param discount_percentage: Discount applied at checkout (0..100).
    :param expiration_date: Aware UTC expiry.
    :param is_active: Whether it may still be used.
    """

    code: str
    discount_percentage: int
    expiration_date: datetime
    is_active: bool

    @classmethod
    def from_model(cls, coupon: Coupon) -> CouponOut:
        return cls(
            code=coupon.code,
            discount_percentage=coupon.discount_percentage,
            expiration_date=as_utc(coupon.expiration_date),
            is_active=bool(coupon.is_active),
        )

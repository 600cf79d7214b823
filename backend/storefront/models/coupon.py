"""Per-identity discount coupons."""

from __future__ import annotations

import math
from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, validates

from storefront.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, as_utc


class Coupon(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Discount owned by a single identity.

    A coupon is usable while ``is_active`` and not past ``expiration_date``.
    It is flipped to inactive when consumed by a confirmed order or when found
    expired during validation/checkout.
    """

    __tablename__ = "coupons"

    code: Mapped[str] = mapped_column(String(32), nullable=False)
    discount_percentage: Mapped[int] = mapped_column(Integer, nullable=False)
    expiration_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("code", name="uq_coupons_code"),
        CheckConstraint(
            "discount_percentage >= 0 AND discount_percentage <= 100",
            name="discount_range",
        ),
        Index("ix_coupons_user_active", "user_id", "is_active"),
    )

    def is_expired(self, now: datetime) -> bool:
        """Return ``True`` when ``expiration_date`` lies before ``now``."""
        return as_utc(self.expiration_date) < as_utc(now)

    def discount_for(self, amount: float) -> int:
        """Discount applied to ``amount``, rounded to whole currency units."""
        # Half-up rounding, not banker's rounding
        return math.floor(amount * self.discount_percentage / 100 + 0.5)

    @validates("code")
    def _normalize_code(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Coupon code is required.")
        return value.strip()

    @validates("discount_percentage")
    def _validate_discount(self, key: str, value: int) -> int:
        if value is None or not 0 <= int(value) <= 100:
            raise ValueError("Discount percentage must be between 0 and 100.")
        return int(value)

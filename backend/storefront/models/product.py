"""Catalog product model."""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from storefront.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Product(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Sellable catalog item.

    Attributes
    ----------
    name:
        Display name.
    description:
        Free-form description.
    price:
        Unit price in the store currency (two decimals).
    image:
        Public URL of the product image.
    category:
        Lowercase category slug (e.g. ``jeans``).
    is_featured:
        Whether the product appears in the featured carousel.
    """

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
        Index("ix_products_category", "category"),
        Index("ix_products_is_featured", "is_featured"),
    )

    @validates("category")
    def _normalize_category(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Category is required.")
        return value.strip().lower()

    @validates("price")
    def _validate_price(self, key: str, value: float) -> float:
        if value is None or float(value) < 0:
            raise ValueError("Price must be >= 0.")
        return float(value)

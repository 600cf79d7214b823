"""Confirmed orders and their lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .product import Product


class Order(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Paid order, created once the gateway reports the payment as ``PAID``.

    Attributes
    ----------
    user_id:
        Buyer.
    total_amount:
        Amount after coupon discount.
    gateway_order_id:
        Merchant order id known to the payment gateway. Unique so a payment
        cannot be confirmed twice.
    payment_session_id:
        Gateway payment session reference.
    """

    __tablename__ = "orders"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    total_amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    gateway_order_id: Mapped[str] = mapped_column(String(64), nullable=False)
    payment_session_id: Mapped[str | None] = mapped_column(String(255))

    __table_args__ = (
        UniqueConstraint("gateway_order_id", name="uq_orders_gateway_order_id"),
        CheckConstraint("total_amount >= 0", name="total_non_negative"),
        Index("ix_orders_user", "user_id"),
        Index("ix_orders_created_at", "created_at"),
    )

    lines: Mapped[list[OrderLine]] = relationship(
        "OrderLine",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLine.id",
        lazy="selectin",
    )


class OrderLine(PKMixin, ReprMixin, db.Model):
    """Product snapshot (quantity and unit price) captured at purchase time."""

    __tablename__ = "order_lines"

    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    product_id: Mapped[int | None] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"), nullable=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="quantity_positive"),
        Index("ix_order_lines_order", "order_id"),
    )

    order: Mapped[Order] = relationship("Order", back_populates="lines")
    product: Mapped[Product | None] = relationship("Product", lazy="selectin")

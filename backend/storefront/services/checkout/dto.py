# storefront/services/checkout/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from storefront.services.cart.dto import CartItemOut


@dataclass(frozen=True, slots=True)
class CheckoutConfig:
    """
    Checkout policy knobs.

    :param frontend_url: Base URL the gateway redirects back to.
    :param gift_threshold: Minimum paid total that earns a gift coupon.
    :param gift_percentage: Discount of the gift coupon.
    :param gift_valid_for: Lifetime of the gift coupon.
    """

    frontend_url: str = "http://localhost:3000"
    gift_threshold: float = 1000
    gift_percentage: int = 10
    gift_valid_for: timedelta = timedelta(days=30)


@dataclass(frozen=True, slots=True)
class CheckoutOut:
    """
    Result of opening a payment.

    :param order_id: Merchant order id registered at the gateway.
    :param session_id: Gateway payment session id.
    :param payment_link: Hosted payment page, when provided.
    :param total_amount: Amount to pay after discount.
    :param coupon_code: Applied coupon code, if any.
    :param items: Cart lines the total was computed from.
    """

    order_id: str
    session_id: str | None
    payment_link: str | None
    total_amount: float
    coupon_code: str | None
    items: list[CartItemOut]


@dataclass(frozen=True, slots=True)
class ConfirmOut:
    """
    Result of confirming a paid order.

    :param order_id: Internal order id.
    :param total_amount: Amount recorded on the order.
    :param gift_coupon: Code of the gift coupon issued, if any.
    """

    order_id: int
    total_amount: float
    gift_coupon: str | None = None

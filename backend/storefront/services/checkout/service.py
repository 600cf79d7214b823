"""
CheckoutService
===============

Two-step payment flow against an external gateway:

1. ``checkout`` prices the caller's cart, applies a coupon and registers an
   order at the gateway.
2. ``confirm`` asks the gateway whether that order is ``PAID`` and, if so,
   records the order, consumes the coupon, empties the cart and may gift a
   new coupon.

Totals are always recomputed server-side from the cart and catalog prices.
"""

from __future__ import annotations

import logging
import secrets
from urllib.parse import urlencode

from sqlalchemy.exc import IntegrityError

from storefront.models.order import Order, OrderLine
from storefront.services._shared.base import BaseService, ServiceContext
from storefront.services._shared.errors import (
    ConflictError,
    NotFoundError,
    PaymentDeclinedError,
    ValidationError,
    violates,
)
from storefront.services._shared.ports.payment_gateway import GatewayCustomer, PaymentGateway
from storefront.services.cart.service import CartService, project_lines
from storefront.services.checkout.dto import CheckoutConfig, CheckoutOut, ConfirmOut
from storefront.services.coupons.service import CouponService

log = logging.getLogger(__name__)

PAID_STATUS = "PAID"


class CheckoutService(BaseService):
    """
    Application service for payments and orders.

    :param gateway: Payment gateway port.
    :param config: Redirect URL and gift-coupon policy.
    """

    def __init__(
        self,
        *,
        gateway: PaymentGateway,
        config: CheckoutConfig | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.gateway = gateway
        self.cfg = config or CheckoutConfig()
        self.coupons = CouponService(ctx=ctx, clock=self._clock)
        self.cart = CartService(ctx=ctx, clock=self._clock)

    # ------------------------------------------------------------------ #
    # Step 1: open a payment
    # ------------------------------------------------------------------ #

    def checkout(self, user_id: int, coupon_code: str | None = None) -> CheckoutOut:
        """
        Price the cart and create the gateway order.

        :raises ValidationError: Empty cart.
        :raises StoreUnavailableError: Gateway unreachable.
        """
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            items = project_lines(user.cart_items)
            if not items:
                raise ValidationError("Cart is empty")
            total = sum(i.subtotal for i in items)
            coupon = self.coupons.usable_coupon(uow, user_id, coupon_code)
            if coupon is not None:
                total -= coupon.discount_for(total)
            applied = coupon.code if coupon is not None else None
            customer = GatewayCustomer(customer_id=str(user.id), email=user.email, name=user.name)

        order_id = self._new_order_id()
        query = urlencode({"order_id": order_id, "coupon": applied or ""})
        gw_order = self.gateway.create_order(
            order_id=order_id,
            amount=round(total, 2),
            customer=customer,
            return_url=f"{self.cfg.frontend_url.rstrip('/')}/purchase-result?{query}",
        )
        log.info("Gateway order created", extra={"user_id": str(user_id), "order_id": order_id})
        return CheckoutOut(
            order_id=gw_order.order_id,
            session_id=gw_order.payment_session_id,
            payment_link=gw_order.payment_link,
            total_amount=round(total, 2),
            coupon_code=applied,
            items=items,
        )

    # ------------------------------------------------------------------ #
    # Step 2: confirm a paid order
    # ------------------------------------------------------------------ #

    def confirm(
        self, user_id: int, gateway_order_id: str, coupon_code: str | None = None
    ) -> ConfirmOut:
        """
        Record a paid order.

        :raises ConflictError: The gateway order was already confirmed, or the
            paid amount no longer matches the cart.
        :raises NotFoundError: The gateway order was opened for another identity.
        :raises PaymentDeclinedError: Gateway status is not ``PAID``.
        :raises ValidationError: Empty cart.
        """
        with self.ro_uow() as uow:
            if uow.orders.get_by_gateway_id(gateway_order_id) is not None:
                raise ConflictError("Order", "payment already confirmed")

        gw_order = self.gateway.fetch_order(gateway_order_id)
        if gw_order.customer_id != str(user_id):
            log.warning(
                "Confirm attempted on a foreign order",
                extra={"user_id": str(user_id), "order_id": gateway_order_id},
            )
            raise NotFoundError("GatewayOrder", gateway_order_id, "Order not found")
        if gw_order.status != PAID_STATUS:
            log.info(
                "Payment not completed",
                extra={"user_id": str(user_id), "order_id": gateway_order_id},
            )
            raise PaymentDeclinedError(
                f"Payment {gw_order.status.lower()}. Please try again.", status=gw_order.status
            )

        gift_code: str | None = None
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            items = project_lines(user.cart_items)
            if not items:
                raise ValidationError("Cart is empty")

            total = sum(i.subtotal for i in items)
            coupon = self.coupons.usable_coupon(uow, user_id, coupon_code)
            if coupon is not None:
                total -= coupon.discount_for(total)
            total = round(total, 2)
            if abs(total - gw_order.amount) > 0.01:
                log.warning(
                    "Paid amount differs from recomputed total",
                    extra={"user_id": str(user_id), "order_id": gateway_order_id},
                )
                raise ConflictError("Order", "paid amount does not match the cart total")
            if coupon is not None:
                coupon.is_active = False

            order = Order(
                user_id=user_id,
                total_amount=total,
                gateway_order_id=gateway_order_id,
                payment_session_id=gw_order.payment_session_id,
                lines=[
                    OrderLine(product_id=i.product_id, quantity=i.quantity, price=i.price)
                    for i in items
                ],
            )
            try:
                uow.orders.add(order)
            except IntegrityError as exc:
                if violates(exc, "gateway_order_id"):
                    raise ConflictError("Order", "payment already confirmed") from exc
                raise

            self.cart.clear(uow, user_id)

            if total >= self.cfg.gift_threshold:
                gift = self.coupons.gift_coupon(
                    uow,
                    user_id,
                    percentage=self.cfg.gift_percentage,
                    valid_for=self.cfg.gift_valid_for,
                )
                gift_code = gift.code
            order_pk = order.id

        log.info(
            "Order confirmed", extra={"user_id": str(user_id), "order_id": gateway_order_id}
        )
        return ConfirmOut(order_id=order_pk, total_amount=total, gift_coupon=gift_code)

    def _new_order_id(self) -> str:
        millis = int(self.now_utc().timestamp() * 1000)
        return f"order_{millis}_{secrets.token_hex(3)}"

"""Payment schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from storefront.schemas.cart import CartItemSchema


class CheckoutSchema(Schema):
    """Input payload for opening a payment."""

    class Meta:
        unknown = EXCLUDE

    coupon_code = fields.String(load_default=None, allow_none=True, data_key="couponCode")


class ConfirmSchema(Schema):
    """Input payload for confirming a payment."""

    class Meta:
        unknown = EXCLUDE

    order_id = fields.String(
        required=True,
        data_key="orderId",
        error_messages={"required": "Order ID is required", "null": "Order ID is required"},
    )
    coupon_code = fields.String(load_default=None, allow_none=True, data_key="couponCode")


class CheckoutResultSchema(Schema):
    order_id = fields.String(data_key="orderId")
    session_id = fields.String(allow_none=True, data_key="sessionId")
    payment_link = fields.String(allow_none=True, data_key="paymentLink")
    total_amount = fields.Float(data_key="totalAmount")
    coupon_code = fields.String(allow_none=True, data_key="couponCode")
    items = fields.List(fields.Nested(CartItemSchema), data_key="products")


class ConfirmResultSchema(Schema):
    order_id = fields.Integer(data_key="orderId")
    total_amount = fields.Float(data_key="totalAmount")
    gift_coupon = fields.String(allow_none=True, data_key="giftCoupon")

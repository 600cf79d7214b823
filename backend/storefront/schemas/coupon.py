"""Coupon schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class CouponValidateSchema(Schema):
    """Input payload for validating a coupon code."""

    code = fields.String(
        required=True,
        error_messages={"required": "Coupon code is required", "null": "Coupon code is required"},
    )


class CouponSchema(Schema):
    """Serialized coupon."""

    code = fields.String(required=True)
    discount_percentage = fields.Integer(data_key="discountPercentage")
    expiration_date = fields.DateTime(data_key="expirationDate")
    is_active = fields.Boolean(data_key="isActive")

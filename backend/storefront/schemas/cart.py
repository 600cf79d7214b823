"""Cart schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class CartAddSchema(Schema):
    """Input payload for adding one unit of a product."""

    product_id = fields.Integer(
        required=True,
        data_key="productId",
        error_messages={"required": "Product ID is required", "null": "Product ID is required"},
    )


class CartRemoveSchema(Schema):
    """Input payload for removing a line; no product clears the cart."""

    class Meta:
        unknown = EXCLUDE

    product_id = fields.Integer(load_default=None, allow_none=True, data_key="productId")


class CartQuantitySchema(Schema):
    """Input payload for setting a line quantity."""

    quantity = fields.Integer(
        required=True,
        strict=True,
        validate=validate.Range(min=0, error="Quantity must be zero or a positive integer"),
    )


class CartItemSchema(Schema):
    """Cart line joined with product details."""

    product_id = fields.Integer(data_key="productId")
    name = fields.String()
    description = fields.String()
    price = fields.Float()
    image = fields.String()
    category = fields.String()
    quantity = fields.Integer()
    subtotal = fields.Float()
